import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from redis import RedisError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from leadintake import __version__
from leadintake.api import admin_ui
from leadintake.api.v1.api import api_router
from leadintake.core.config import Settings, settings as default_settings
from leadintake.core.database import build_engine, build_session_factory, init_db
from leadintake.core.exceptions import BaseAppException
from leadintake.services.intake_service import IntakeService
from leadintake.services.intake_types import INTAKE_TYPES
from leadintake.services.moderation_service import ModerationService
from leadintake.services.notifier import QueuedNotifier
from leadintake.services.record_store import RecordStore
from leadintake.services.user_service import UserService
from leadintake.utils import rate_limiter
from leadintake.utils.audit import configure_audit_logger

# Load environment variables
load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-site",
}


def _error(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message}, headers=headers)


def _secure(response):
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


class BodySizeLimitMiddleware:
    """Reject request bodies over ``max_bytes``.

    A declared Content-Length is checked up front; chunked bodies are counted
    as they stream in.
    """

    def __init__(self, app, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            await _secure(_error(413, "Payload too large"))(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    # FastAPI re-raises HTTPException from body reads; the handler renders it
                    raise StarletteHTTPException(status_code=413, detail="Payload too large")
            return message

        await self.app(scope, limited_receive, send)


def _client_id(request: Request, trust_proxy: bool) -> str:
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        if forwarded:
            # One trusted proxy hop: its appended address is the last entry
            return forwarded.split(",")[-1].strip()
    return request.client.host if request.client else "unknown"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BaseAppException)
    async def app_exception_handler(request: Request, exc: BaseAppException):
        return _error(exc.status_code, exc.message, getattr(exc, "headers", None))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body"
            problems.append(f"{field}: {err.get('msg', 'invalid')}")
        return _error(400, "; ".join(problems) or "Invalid request")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, "Internal server error")


def create_app(settings: Settings = None, notifier=None) -> FastAPI:
    """Build the API with its own engine, stores and services.

    ``notifier`` defaults to the Celery-backed queue; tests pass a fake.
    """
    settings = settings or default_settings
    configure_audit_logger()

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    session_factory = build_session_factory(engine)
    stores = {
        name: RecordStore(session_factory, definition.model, max_limit=settings.LIST_LIMIT_MAX)
        for name, definition in INTAKE_TYPES.items()
    }

    app = FastAPI(
        title="Lead Intake API",
        description="Waitlist and courier application intake with admin moderation.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.stores = stores
    app.state.intake_service = IntakeService(
        stores,
        notifier=notifier if notifier is not None else QueuedNotifier(),
        site_name=settings.SITE_NAME,
    )
    app.state.moderation_service = ModerationService(stores, admin_key=settings.ADMIN_KEY)
    app.state.user_service = UserService(session_factory)

    register_exception_handlers(app)

    @app.middleware("http")
    async def boundary_guard(request: Request, call_next):
        if settings.RATE_LIMIT_ENABLED and request.method != "OPTIONS":
            client = _client_id(request, settings.TRUST_PROXY)
            try:
                allowed = await run_in_threadpool(
                    rate_limiter.allow_for_client,
                    client,
                    settings.RATE_LIMIT_MAX_REQUESTS,
                    settings.RATE_LIMIT_WINDOW_SECONDS,
                )
            except RedisError as e:
                logger.warning(f"⚠️ Rate limiter unavailable, letting request through: {e}")
                allowed = True
            if not allowed:
                return _secure(_error(429, "Too many requests"))

        return _secure(await call_next(request))

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_BODY_BYTES)

    # GZip compression for large JSON responses
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Set up CORS (outermost, so error responses carry the headers too)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "x-admin-key"],
    )

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(admin_ui.router)

    @app.get("/")
    async def root():
        return {"ok": True, "message": f"{settings.SITE_NAME} backend is running 🚀"}

    @app.get("/health")
    async def health_check():
        return {"ok": True}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=10000)
