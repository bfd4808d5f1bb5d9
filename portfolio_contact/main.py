# portfolio_contact/main.py

import logging

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from portfolio_contact.common.config import Settings, settings as default_settings
from portfolio_contact.common.exceptions import OriginNotAllowedError, RateLimitExceededError
from portfolio_contact.common.rate_limit import RateLimiter
from portfolio_contact.common.utils.email_service import Mailer, SmtpMailer
from portfolio_contact.common.utils.global_messages import GlobalMessages
from portfolio_contact.modules.contact.validators import ContactValidationError
from portfolio_contact.router.routers import include_routers

# Centralized logging configuration
logging.basicConfig(
    level=getattr(logging, default_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    logger.info(
        f"Contact API starting ({app_settings.APP_ENV}); "
        f"allowed origins: {', '.join(app_settings.ALLOWED_ORIGINS)}; "
        f"rate limit: {app.state.rate_limiter.item}"
    )
    yield
    logger.info("Contact API shutting down")

async def validation_error_handler(request: Request, exc: ContactValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.messages})

async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceededError):
    headers = {"Retry-After": str(exc.retry_after)} if exc.retry_after is not None else None
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": f"Rate limit exceeded: {exc.limit}"},
        headers=headers,
    )

async def origin_not_allowed_handler(request: Request, exc: OriginNotAllowedError):
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"success": False, "error": GlobalMessages.ORIGIN_NOT_ALLOWED},
    )

async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    # This response is built outside CORSMiddleware, so allowed origins get their headers here.
    headers = None
    origin = request.headers.get("origin")
    if origin and origin in request.app.state.settings.ALLOWED_ORIGINS:
        headers = {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": GlobalMessages.INTERNAL_SERVER_ERROR},
        headers=headers,
    )

def create_app(
    settings: Optional[Settings] = None,
    mailer: Optional[Mailer] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Collaborators default to the ones described by the settings; tests pass
    their own mailer and limiter instead.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Portfolio Contact API",
        description="Receives contact form submissions and forwards them by email.",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.mailer = mailer or SmtpMailer(settings)
    app.state.rate_limiter = rate_limiter or RateLimiter(
        settings.CONTACT_RATE_LIMIT, storage_uri=settings.RATE_LIMIT_STORAGE_URI
    )

    app.add_exception_handler(ContactValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_handler)
    app.add_exception_handler(OriginNotAllowedError, origin_not_allowed_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Adds CORS headers for the allowed origins and answers preflight requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )

    include_routers(app)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "message": "API is running"}

    return app

app = create_app()
