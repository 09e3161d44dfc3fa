"""FastAPI application factory and error mapping."""

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.api.routes import router as auth_router
from storefront.ordering.api.routes import order_router
from storefront.reviews.api.routes import review_router
from storefront.shared.errors import StorefrontError
from storefront.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for field_name, errors in messages.items():
            detail = errors[0] if isinstance(errors, list) and errors else errors
            return f"{field_name}: {detail}"
    return str(messages)


def register_error_handlers(app: FastAPI) -> None:
    """Map domain failures to ``{"error": kind, "message": text}`` responses."""
    register_exception_handlers(app)

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        logger.info("request_rejected", kind=exc.kind, message=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation", "message": _first_message(exc.messages), "details": exc.messages},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        details = {".".join(str(part) for part in error["loc"]): [error["msg"]] for error in exc.errors()}
        return JSONResponse(
            status_code=400,
            content={"error": "Validation", "message": _first_message(details), "details": details},
        )

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": "NotFound", "message": "Resource not found"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal", "message": "Internal server error"})


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Account activation, order ledger and verified reviews",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Run each request inside the storefront domain context, with request log context bound."""
        add_context(
            request_id=request.headers.get("x-request-id") or uuid4().hex[:12],
            method=request.method,
            path=request.url.path,
        )
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    app.include_router(auth_router)
    app.include_router(order_router)
    app.include_router(review_router)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name, "env": settings.app_env})

    return app
