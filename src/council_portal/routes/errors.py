"""Render coordinator errors as JSON responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from council_portal.exceptions import EditCoordinationError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


async def edit_coordination_error_handler(
    request: Request, exc: EditCoordinationError
) -> JSONResponse:
    logger.debug("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder({"success": False, "message": exc.message, **exc.payload()}),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EditCoordinationError, edit_coordination_error_handler)  # type: ignore[arg-type]
