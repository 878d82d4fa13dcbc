"""
Migration trigger endpoints.

Two transports wrap the same BackfillMigrator: a callable-style endpoint that
requires a Firebase ID token, and a plain HTTP endpoint open to any origin.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from tenant_admin.api.deps import MigratorFactory, get_caller, get_migrator_factory
from tenant_admin.core.exceptions import MigrationError
from tenant_admin.schemas.responses import (
    CallableErrorResponse,
    CallableMigrationResponse,
    MigrationErrorResponse,
    MigrationResponse,
)
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Migrations"])

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def _callable_error(status_code: int, error_status: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"status": error_status, "message": message}},
    )


@router.post("/addIsActiveToAllUsers",
             response_model=CallableMigrationResponse,
             responses={401: {"model": CallableErrorResponse}, 500: {"model": CallableErrorResponse}},
             summary="Backfill is_active (authenticated)",
             description="Add is_active to every user of every organization. Requires a Firebase ID token.")
def add_is_active_to_all_users(
    caller: Optional[Dict[str, Any]] = Depends(get_caller),
    build_migrator: MigratorFactory = Depends(get_migrator_factory),
):
    if not caller:
        return _callable_error(status.HTTP_401_UNAUTHORIZED, "UNAUTHENTICATED", "Must be authenticated")

    logger.info(f"Migration requested by {caller.get('uid')}")
    try:
        result = build_migrator().run()
    except MigrationError as e:
        return _callable_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL", e.message)

    body = MigrationResponse(total_updated=result.updated_count)
    return {"result": body.model_dump(by_alias=True)}


@router.api_route("/addIsActiveHttp",
                  methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
                  response_model=MigrationResponse,
                  responses={500: {"model": MigrationErrorResponse}},
                  summary="Backfill is_active (HTTP)",
                  description="Add is_active to every user of every organization. No authentication.")
def add_is_active_http(build_migrator: MigratorFactory = Depends(get_migrator_factory)):
    try:
        result = build_migrator().run()
    except MigrationError as e:
        body = MigrationErrorResponse(error=e.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
            headers=CORS_HEADERS,
        )

    body = MigrationResponse(total_updated=result.updated_count)
    return JSONResponse(content=body.model_dump(by_alias=True), headers=CORS_HEADERS)
