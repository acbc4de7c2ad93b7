from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

from rollexpr.errors import DiceError
from rollexpr.routers import rolls

logger = logging.getLogger(__name__)

app = FastAPI(title="rollexpr")

app.include_router(rolls.router)


@app.exception_handler(DiceError)
async def dice_error_handler(request: Request, exc: DiceError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.kind.value)
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "kind": exc.kind.value},
    )
