import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__, runtime
from .config import Settings, get_settings
from .errors import internal_error, not_found
from .models import BuildInfo, HealthResponse, InfoResponse, WelcomeResponse

logger = logging.getLogger(__name__)

# Express-style routing: a GET route also answers HEAD
READ_METHODS = ["GET", "HEAD"]

router = APIRouter()


def app_settings(request: Request) -> Settings:
    return request.app.state.settings


# === Routes ===


@router.api_route("/", methods=READ_METHODS, response_model=WelcomeResponse)
def welcome(settings: Settings = Depends(app_settings)) -> WelcomeResponse:
    return WelcomeResponse(
        message=settings.welcome_message,
        timestamp=runtime.now_iso(),
        buildInfo=BuildInfo(
            type=settings.build_type,
            baseImage=settings.base_image,
            source=settings.build_source,
        ),
    )


@router.api_route("/health", methods=READ_METHODS, response_model=HealthResponse)
def health() -> HealthResponse:
    """Liveness probe. Must stay cheap and free of side effects."""
    return HealthResponse(uptime=runtime.uptime(), timestamp=runtime.now_iso())


@router.api_route("/api/info", methods=READ_METHODS, response_model=InfoResponse)
def info(settings: Settings = Depends(app_settings)) -> InfoResponse:
    return InfoResponse(
        nodeVersion=runtime.runtime_version(),
        platform=runtime.platform_id(),
        arch=runtime.arch(),
        memory=runtime.memory_usage(),
        environment=settings.environment,
    )


# === Fallbacks ===


def request_path(request: Request) -> str:
    """Path as sent by the client, before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1")
    return request.url.path


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def route_not_found(request: Request, exc: StarletteHTTPException):
        # 405 from a known path with another method is still "no such route"
        if exc.status_code in (404, 405):
            body = not_found(request.method, request_path(request))
            return JSONResponse(status_code=404, content=body.model_dump())
        return await http_exception_handler(request, exc)


async def _static_response(static: StaticFiles, request: Request):
    try:
        response = await static.get_response(static.get_path(request.scope), request.scope)
    except StarletteHTTPException:
        return None
    # html mode answers misses with public/404.html; routing gets those instead
    if response.status_code == 404:
        return None
    return response


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware innermost first: static files, failure guard, CORS."""
    static = StaticFiles(directory=settings.public_dir, html=True, check_dir=False)

    @app.middleware("http")
    async def serve_static(request: Request, call_next):
        if request.method in READ_METHODS and os.path.isdir(settings.public_dir):
            response = await _static_response(static, request)
            if response is not None:
                return response
        return await call_next(request)

    @app.middleware("http")
    async def catch_handler_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "Unhandled error on %s %s",
                request.method,
                request.url.path,
                extra={"method": request.method, "path": request.url.path},
            )
            return JSONResponse(status_code=500, content=internal_error(exc).model_dump())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application started (environment=%s)", settings.environment)
        yield
        logger.info("Application stopped")

    app = FastAPI(
        title="BuildConfig Demo",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.include_router(router)
    register_error_handlers(app)
    register_middleware(app, settings)
    return app
