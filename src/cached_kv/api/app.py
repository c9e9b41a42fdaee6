"""FastAPI application entry point for the key-value API.

Routes (exact method and path match):
    GET  /      cached bulk read
    POST /set   rate-limited single write
    *    *      404, plain text "Not Found"
"""

from fastapi import BackgroundTasks, FastAPI, Request, Response

from cached_kv.api.dependencies import HandlerDep, lifespan
from cached_kv.config import settings
from cached_kv.dto import ErrorResponse, SetValueResponse
from cached_kv.errors import RouteNotFoundError, register_error_handlers
from cached_kv.handlers import KVHandler

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(handler: KVHandler | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        handler: Pre-built handler (e.g. over in-memory repositories). If
            None, the lifespan builds one from settings.

    Returns:
        The configured FastAPI application
    """
    app = FastAPI(
        title="Cached KV API",
        description="Key-value API with a cached bulk read and a rate-limited write",
        version="0.1.0",
        lifespan=lifespan,
    )
    if handler is not None:
        app.state.kv_handler = handler

    register_error_handlers(app)

    @app.get("/", response_model=dict[str, str])
    async def read_all(request: Request, background_tasks: BackgroundTasks, kv: HandlerDep) -> Response:
        """Every stored key/value pair, served through the response cache."""
        return await kv.read_all(request, background_tasks)

    @app.post(
        "/set",
        response_model=SetValueResponse,
        responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    )
    async def set_value(request: Request, kv: HandlerDep) -> Response:
        """Store one key/value pair, rate limited per client."""
        return await kv.set_value(request)

    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def not_found(path: str) -> Response:
        raise RouteNotFoundError()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cached_kv.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
