from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import auth, events
from app.core.config import Settings, get_settings
from app.core.exceptions import AppError
from app.core.logging_config import configure_logging, get_logger
from app.db.session import Database
from app.utils.cloudinary_utils import AssetStore, CloudinaryAssetStore

logger = get_logger()


def _validation_errors(errors) -> list[dict]:
    return [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg")}
        for err in errors
    ]


def register_exception_handlers(app: FastAPI, settings: Settings):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {request.method} {request.url} -> {exc.message}")
            message = exc.message if not settings.is_production else type(exc).default_message
        else:
            message = exc.message
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Validation failed", "errors": _validation_errors(exc.errors())},
        )

    @app.exception_handler(PydanticValidationError)
    async def model_validation_handler(request: Request, exc: PydanticValidationError):
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Validation failed", "errors": _validation_errors(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"ERROR: {request.method} {request.url} -> {exc}")
        content = {"success": False, "message": "Server Error"}
        if not settings.is_production:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    asset_store: AssetStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    settings.validate()

    database = database or Database(settings.database_url)
    asset_store = asset_store or CloudinaryAssetStore(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        logger.info(f"Database ready ({settings.app_env})")
        yield
        database.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title="Events Admin API",
        version="1.0.0",
        description="Events with Cloudinary images and JWT admin authentication",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.asset_store = asset_store

    # ⭐ Request Logging Middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"REQUEST: {request.method} {request.url}")
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    # ⭐ CORS (important for frontend)
    allow_all = settings.cors_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app, settings)

    app.include_router(auth.router, prefix="/api")
    app.include_router(events.router, prefix="/api")

    @app.get("/api/health", tags=["Health"])
    def health():
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
