"""
FastAPI entrypoint for the Jukeboxd backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from jukeboxd.core.config import settings
from jukeboxd.core.errors import JukeboxdError
from jukeboxd.core.logging_config import setup_logging
from jukeboxd.core.utils import format_error
from jukeboxd.api.router import api_router
from jukeboxd.db.session import client, init_db

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(client[settings.MONGO_DB_NAME])
    logger.info("Jukeboxd is up and running!")
    yield
    client.close()


app = FastAPI(
    title="Jukeboxd API",
    description="Post about songs, comment, and follow other listeners",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JukeboxdError)
async def jukeboxd_error_handler(request: Request, exc: JukeboxdError):
    """Render store and validation errors with their status hint."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error(exc.message, {"kind": exc.kind.value})
    )


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Jukeboxd API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "jukeboxd.main:app",
        host="0.0.0.0",
        port=3000,
        reload=settings.DEBUG,
    )
