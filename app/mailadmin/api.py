from fastapi import APIRouter

from app.mailadmin.routers.aliases import router as aliases_router
from app.mailadmin.routers.auth import router as auth_router
from app.mailadmin.routers.health import router as health_router
from app.mailadmin.routers.users import router as users_router
from app.mailadmin.schemas.errors import ApiErrorResponse

ERROR_RESPONSES = {
    status_code: {"model": ApiErrorResponse}
    for status_code in (400, 401, 403, 404, 409, 422, 503)
}

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router, prefix="/api/auth", tags=["auth"], responses=ERROR_RESPONSES)
api_router.include_router(users_router, prefix="/api", tags=["users"], responses=ERROR_RESPONSES)
api_router.include_router(aliases_router, prefix="/api", tags=["aliases"], responses=ERROR_RESPONSES)
