import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute

from database.db import Database
from dependencies.database import get_database
from dependencies.security import authorize
from middlewares.error_handler import describe_validation
from services.dashboard_service import build_dashboard
from utils.exceptions import AppError, BadRequestError
from utils.rbac import RequirePermission

logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


def _no_store(exc: AppError) -> AppError:
    exc.headers = {**(exc.headers or {}), **NO_STORE}
    return exc


class NoStoreRoute(APIRoute):
    """
    성공/실패 모두 Cache-Control: no-store
    - 권한 검사, 요청 검증 등 의존성 단계에서 난 에러도 포함
    """

    def get_route_handler(self) -> Callable:
        route_handler = super().get_route_handler()

        async def no_store_route_handler(request: Request) -> Response:
            try:
                response = await route_handler(request)
            except RequestValidationError as exc:
                raise _no_store(BadRequestError(describe_validation(exc), code="VALIDATION_ERROR"))
            except AppError as exc:
                raise _no_store(exc)
            response.headers.update(NO_STORE)
            return response

        return no_store_route_handler


router = APIRouter(prefix="/dashboard", tags=["dashboard"], route_class=NoStoreRoute)


# ==========================================================
# [DASHBOARD] 전체 현황 한 번에 반환 (성공/실패 모두 캐시 금지)
# ==========================================================
@router.get("")
async def get_dashboard(
    user: dict = Depends(authorize(RequirePermission("Dashboard", "view"))),
    database: Database = Depends(get_database),
):
    try:
        data = await build_dashboard(database)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("[GET /api/dashboard] Error")
        raise AppError(str(exc) or "Failed to load dashboard")
    return {"success": True, **data}
