"""Link Relay — FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from relay.config import settings
from relay.errors import MalformedRequestError, RelayError
from relay.responses import error_response

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Link relay ready (mode=%s)", settings.deployment_mode)
    yield
    logger.info("Link relay stopped")


app = FastAPI(
    title="Link Relay",
    description="Auth proxy and Discord message relay",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.message, exc.status_code or 500)


@app.exception_handler(RequestValidationError)
async def malformed_request_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
    err = MalformedRequestError()
    return error_response(err.message, err.status_code)


# Import and register routers
from relay.api.auth import router as auth_router
from relay.api.messages import router as messages_router

app.include_router(auth_router)
app.include_router(messages_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Send message to Discord channel"


@app.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"
