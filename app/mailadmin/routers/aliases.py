from fastapi import APIRouter, Depends, Query

from app.mailadmin.core.context import RequestContext
from app.mailadmin.core.deps import require_admin, require_request_context
from app.mailadmin.core.query import QuerySpec
from app.mailadmin.db.session import get_db
from app.mailadmin.repos.aliases import ALIAS_RESOURCE
from app.mailadmin.schemas.aliases import AliasActiveRequest, AliasItem, AliasListResponse, AliasSaveRequest
from app.mailadmin.schemas.listing import (
    ColumnMeta,
    ColumnsResponse,
    CountResponse,
    MutationResponse,
    RangeMeta,
    query_spec_params,
)
from app.mailadmin.services.aliases import AliasService

router = APIRouter()


@router.get("/aliases", response_model=AliasListResponse)
async def list_aliases(
    context: RequestContext = Depends(require_request_context),
    spec: QuerySpec = Depends(query_spec_params),
    db=Depends(get_db),
):
    rows = AliasService(db).list(spec)
    start = spec.range.start
    return AliasListResponse(
        rows=[AliasItem(**ALIAS_RESOURCE.to_item(row)) for row in rows],
        range=RangeMeta(start=start, end=start + len(rows)),
        trace_id=context.trace_id,
    )


@router.get("/aliases/count", response_model=CountResponse)
async def count_aliases(
    search: str = Query(""),
    context: RequestContext = Depends(require_request_context),
    db=Depends(get_db),
):
    return CountResponse(count=AliasService(db).count(search), trace_id=context.trace_id)


@router.get("/aliases/columns", response_model=ColumnsResponse)
async def alias_columns(context: RequestContext = Depends(require_request_context)):
    return ColumnsResponse(
        resource=ALIAS_RESOURCE.name,
        identity=ALIAS_RESOURCE.identity_key,
        columns=[ColumnMeta(**column) for column in ALIAS_RESOURCE.describe()],
        trace_id=context.trace_id,
    )


@router.post("/aliases", response_model=MutationResponse)
async def save_alias(
    payload: AliasSaveRequest,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    alias = AliasService(db).create_or_update(
        context,
        old_address=payload.old_address,
        address=payload.address,
        target=payload.target,
        comment=payload.comment,
        active=payload.active,
    )
    return MutationResponse(resource=ALIAS_RESOURCE.name, resource_id=alias.address, trace_id=context.trace_id)


@router.patch("/aliases/{address:path}/active", response_model=MutationResponse)
async def set_alias_active(
    address: str,
    payload: AliasActiveRequest,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    alias = AliasService(db).set_active(context, address, payload.active)
    return MutationResponse(resource=ALIAS_RESOURCE.name, resource_id=alias.address, trace_id=context.trace_id)


@router.delete("/aliases/{address:path}", response_model=MutationResponse)
async def delete_alias(
    address: str,
    context: RequestContext = Depends(require_admin),
    db=Depends(get_db),
):
    AliasService(db).delete(context, address)
    return MutationResponse(resource=ALIAS_RESOURCE.name, resource_id=address, trace_id=context.trace_id)
