from fastapi import APIRouter, Depends, Query

from app.mailadmin.core.context import RequestContext
from app.mailadmin.core.deps import require_admin
from app.mailadmin.core.query import QuerySpec
from app.mailadmin.db.session import get_db
from app.mailadmin.repos.users import USER_RESOURCE
from app.mailadmin.schemas.listing import (
    ColumnMeta,
    ColumnsResponse,
    CountResponse,
    MutationResponse,
    RangeMeta,
    query_spec_params,
)
from app.mailadmin.schemas.users import UserFlagsRequest, UserItem, UserListResponse, UserSaveRequest
from app.mailadmin.services.users import UserService

router = APIRouter()


@router.get("/users", response_model=UserListResponse)
async def list_users(
    context: RequestContext = Depends(require_admin),
    spec: QuerySpec = Depends(query_spec_params),
    db=Depends(get_db),
):
    rows = UserService(db).list(spec)
    start = spec.range.start
    return UserListResponse(
        rows=[UserItem(**USER_RESOURCE.to_item(row)) for row in rows],
        range=RangeMeta(start=start, end=start + len(rows)),
        trace_id=context.trace_id,
    )


@router.get("/users/count", response_model=CountResponse)
async def count_users(
    search: str = Query(""),
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    return CountResponse(count=UserService(db).count(search), trace_id=context.trace_id)


@router.get("/users/columns", response_model=ColumnsResponse)
async def user_columns(context: RequestContext = Depends(require_admin)):
    return ColumnsResponse(
        resource=USER_RESOURCE.name,
        identity=USER_RESOURCE.identity_key,
        columns=[ColumnMeta(**column) for column in USER_RESOURCE.describe()],
        trace_id=context.trace_id,
    )


@router.post("/users", response_model=MutationResponse)
async def save_user(
    payload: UserSaveRequest,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    user = UserService(db).create_or_update(
        context,
        old_username=payload.old_username,
        username=payload.username,
        password=payload.password,
        admin=payload.admin,
        active=payload.active,
    )
    return MutationResponse(resource=USER_RESOURCE.name, resource_id=user.username, trace_id=context.trace_id)


@router.patch("/users/{username:path}/flags", response_model=MutationResponse)
async def set_user_flags(
    username: str,
    payload: UserFlagsRequest,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    user = UserService(db).set_flags(context, username, admin=payload.admin, active=payload.active)
    return MutationResponse(resource=USER_RESOURCE.name, resource_id=user.username, trace_id=context.trace_id)


@router.delete("/users/{username:path}", response_model=MutationResponse)
async def delete_user(
    username: str,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    UserService(db).delete(context, username)
    return MutationResponse(resource=USER_RESOURCE.name, resource_id=username, trace_id=context.trace_id)
