from fastapi import Depends, Request
from jose import JWTError
from pydantic import ValidationError

from app.mailadmin.core.context import Principal, RequestContext, build_request_context, get_trace_id
from app.mailadmin.core.error_catalog import AppError, ErrorCatalog
from app.mailadmin.core.security import TokenData, decode_token, oauth2_scheme
from app.mailadmin.db.session import get_db
from app.mailadmin.repos.users import UserRepository


def get_current_token_data(token: str | None = Depends(oauth2_scheme)) -> TokenData:
    if not token:
        raise AppError(ErrorCatalog.UNAUTHORIZED)
    try:
        payload = decode_token(token)
        return TokenData(**payload)
    except (JWTError, ValidationError, TypeError) as exc:
        raise AppError(ErrorCatalog.UNAUTHORIZED) from exc


def get_current_user(token_data: TokenData = Depends(get_current_token_data), db=Depends(get_db)):
    user = UserRepository(db).get_by_username(token_data.sub)
    if user is None or not user.active:
        raise AppError(ErrorCatalog.UNAUTHORIZED)
    return user


def require_request_context(request: Request, user=Depends(get_current_user)) -> RequestContext:
    principal = Principal(username=user.username, admin=user.admin, active=user.active)
    context = build_request_context(principal=principal, trace_id=get_trace_id(request))
    request.state.principal = principal.username
    request.state.context = context
    return context


def require_admin(context: RequestContext = Depends(require_request_context)) -> RequestContext:
    if not context.principal.admin:
        raise AppError(ErrorCatalog.FORBIDDEN)
    return context


__all__ = [
    "get_current_token_data",
    "get_current_user",
    "require_request_context",
    "require_admin",
]
