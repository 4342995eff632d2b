import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import RouteNotFound, TodoApiError
from .logging_config import setup_logging
from .repositories import InMemoryRepository
from .responses import UTF8JSONResponse
from .routers import todos as todos_router
from .schemas import HealthOut
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Monotonic reference for /health uptime; set when the process imports the app.
_PROCESS_STARTED = time.monotonic()

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items held in memory."},
]


async def route_not_found(request: Request) -> None:
    """Catch-all endpoint: any (method, path) pair without a route is a 404."""
    raise RouteNotFound()


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    A fresh InMemoryRepository is created here and kept on app.state for the
    lifetime of the app, so every request handled by this app shares it.

    Args:
        settings: Explicit settings; read from the environment when omitted.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title="Todo API",
        description="Minimal HTTP service exposing CRUD operations over in-memory todos.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        default_response_class=UTF8JSONResponse,
    )
    app.state.settings = settings
    app.state.repository = InMemoryRepository()

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        # Preflights are answered here, before routing; only the served verbs pass.
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> UTF8JSONResponse:
        """
        Render every HTTP error as {"message": ...}, keeping headers such as
        Allow (405) and Connection (413). A 405 raised by Starlette itself (method
        not listed on any matching route) is replaced by the todo API's own
        404/405 decision.
        """
        if exc.status_code == 405 and not isinstance(exc, TodoApiError):
            exc = todos_router.unrouted_method_error(request)
        return UTF8JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> UTF8JSONResponse:
        """
        Last resort for anything unanticipated. Details stay in the server log.
        """
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return UTF8JSONResponse(status_code=500, content={"message": "Internal Server Error"})

    # PUBLIC_INTERFACE
    @app.get("/health", response_model=HealthOut, summary="Health Check", tags=["health"])
    async def health_check() -> HealthOut:
        """
        Health check endpoint.

        Returns:
            ok=true and the number of seconds since process start.
        """
        return HealthOut(ok=True, uptime=time.monotonic() - _PROCESS_STARTED)

    # Include routers; the fallbacks must come after them.
    app.include_router(todos_router.router)
    app.add_route(
        "/todos/{todo_id:int}",
        todos_router.todo_method_not_allowed,
        methods=todos_router.FALLBACK_METHODS,
        include_in_schema=False,
    )
    app.add_route("/{path:path}", route_not_found, methods=todos_router.FALLBACK_METHODS, include_in_schema=False)

    return app


app = create_app()
