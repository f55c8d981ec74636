import socket
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptide.api.router import api_router
from promptide.core.config import settings
from promptide.core.exceptions import InvalidPathError, PathConflictError, PromptIDEError
from promptide.core.logging_config import logger
from promptide.core.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME} service...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Workspace root: {settings.WORKSPACE_DIR.resolve()}")
    logger.info("=" * 60)

    settings.WORKSPACE_DIR.mkdir(parents=True, exist_ok=True)

    yield

    logger.info(f"Shutting down {settings.APP_NAME} service...")


app = FastAPI(
    title=settings.APP_NAME,
    description="File persistence and chat service for the PromptIDE workspace",
    version="1.0.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Middleware (last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


# Exception handlers
@app.exception_handler(PromptIDEError)
async def promptide_exception_handler(request: Request, exc: PromptIDEError):
    status_code = 400 if isinstance(exc, (InvalidPathError, PathConflictError)) else 500
    logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.message, **exc.to_dict()})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": str(exc) if settings.DEBUG else "Internal Server Error"}
    )


app.include_router(api_router, prefix=settings.API_PREFIX)


def find_available_port(start_port: int, host: str = "0.0.0.0", attempts: int = 10) -> int:
    """First port from start_port upwards that can be bound"""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, port))
            except OSError:
                logger.info(f"Port {port} is busy, trying {port + 1}")
                continue
        return port
    raise RuntimeError(f"No free port in {start_port}-{start_port + attempts - 1}")


def run() -> None:
    import uvicorn

    port = find_available_port(settings.SERVER_PORT, settings.SERVER_HOST)
    logger.info(f"serving on port {port}")
    uvicorn.run(app, host=settings.SERVER_HOST, port=port)


if __name__ == "__main__":
    run()
