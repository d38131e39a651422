from dataclasses import dataclass

from fastapi import Request


@dataclass(frozen=True)
class Principal:
    username: str
    admin: bool
    active: bool


@dataclass(frozen=True)
class RequestContext:
    principal: Principal
    trace_id: str

    @property
    def actor(self) -> str:
        return self.principal.username


def build_request_context(*, principal: Principal, trace_id: str) -> RequestContext:
    return RequestContext(principal=principal, trace_id=trace_id)


def get_trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", "")
