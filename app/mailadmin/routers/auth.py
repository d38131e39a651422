from fastapi import APIRouter, Depends, Request

from app.mailadmin.core.context import RequestContext, get_trace_id
from app.mailadmin.core.deps import get_current_user, require_request_context
from app.mailadmin.db.session import get_db
from app.mailadmin.schemas.auth import (
    ChangePasswordRequest,
    ChangePasswordResponse,
    LoginRequest,
    MeResponse,
    TokenResponse,
)
from app.mailadmin.services.auth import AuthService

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login",
    description="Exchange a username and password for a bearer token.",
)
async def login(request: Request, payload: LoginRequest, db=Depends(get_db)):
    trace_id = get_trace_id(request)
    _, token = AuthService(db).login(payload.username, payload.password, trace_id=trace_id)
    return TokenResponse(access_token=token, trace_id=trace_id)


@router.get("/me", response_model=MeResponse)
async def me(context: RequestContext = Depends(require_request_context)):
    principal = context.principal
    return MeResponse(
        username=principal.username,
        admin=principal.admin,
        active=principal.active,
        trace_id=context.trace_id,
    )


@router.post(
    "/change-password",
    response_model=ChangePasswordResponse,
    summary="Change Password (Authenticated User)",
)
async def change_password(
    payload: ChangePasswordRequest,
    context: RequestContext = Depends(require_request_context),
    current_user=Depends(get_current_user),
    db=Depends(get_db),
):
    AuthService(db).change_password(
        current_user,
        payload.current_password,
        payload.new_password,
        trace_id=context.trace_id,
    )
    return ChangePasswordResponse(ok=True, message="Password updated successfully", trace_id=context.trace_id)
