"""Liveness endpoint served next to the stdio transport.

A tiny Starlette app answering GET /health with a static status and the
current UTC timestamp. It has no access to the tools.
"""

from __future__ import annotations

from datetime import datetime, timezone

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route


async def health(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )


def build_health_app() -> Starlette:
    return Starlette(routes=[Route("/health", health, methods=["GET"])])


def build_health_server(*, host: str, port: int) -> uvicorn.Server:
    # stdout carries the MCP stream: no access log, no uvicorn log config.
    config = uvicorn.Config(
        build_health_app(),
        host=host,
        port=int(port),
        access_log=False,
        log_config=None,
        lifespan="off",
    )
    return uvicorn.Server(config)
