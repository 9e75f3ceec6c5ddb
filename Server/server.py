"""
CampusShare Server - Main FastAPI Application

This module contains the main FastAPI application for the CampusShare server.
Students upload course materials; anyone can browse and download them,
signed-in users see full details.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

import database
from config import Settings, get_settings
from errors import CampusShareError, Unauthorized
from file_storage import InitializeStorage
from managers.database_manager import DatabaseManager

logger = logging.getLogger(__name__)


# ==================== Logging ====================

def ConfigureLogging(settings: Settings) -> None:
    """
    Configure logging to write to both console and file

    The file handler rotates at 10MB and keeps 10 backups. An empty
    log_dir setting disables file logging.
    """
    handlers = [logging.StreamHandler()]

    if settings.log_dir:
        logs_dir = Path(settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_filename = logs_dir / f"campusshare-server-{datetime.now().strftime('%Y-%m-%d')}.log"
        handlers.append(
            RotatingFileHandler(
                log_filename,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=10,
                encoding='utf-8'
            )
        )

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Manages database initialization and cleanup
    """
    settings = get_settings()
    ConfigureLogging(settings)

    # Startup
    logger.info("CampusShare Server starting up...")

    database.db_manager = DatabaseManager(settings.database_path)
    database.db_manager.InitializeDatabase(seed_demo_user=settings.seed_demo_user)
    logger.info(f"Database initialized successfully: {settings.database_path}")

    InitializeStorage(settings.upload_dir)
    logger.info("File storage initialized successfully")

    logger.info("Server startup complete")

    yield

    # Shutdown
    logger.info("CampusShare Server shutting down...")
    database.db_manager.Dispose()
    logger.info("Shutdown complete")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="CampusShare Server",
    description="Course material sharing portal for students",
    version="1.0.0",
    lifespan=lifespan
)

# ==================== CORS Middleware ====================

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== Exception Handlers ====================

@app.exception_handler(CampusShareError)
async def campusshare_error_handler(request: Request, exc: CampusShareError):
    """Render domain errors as {"detail": message} with their status code"""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are 400, not 422"""
    errors = jsonable_encoder(exc.errors())
    messages = [f"{'.'.join(str(part) for part in error['loc'][1:])}: {error['msg']}" for error in errors]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Validation failed", "errors": errors}
    )


# ==================== Import Routers ====================

from routes import status as status_routes, auth, materials, files


# ==================== Include Routers ====================

app.include_router(status_routes.router)
app.include_router(auth.router)
app.include_router(materials.router)
app.include_router(files.router)


# ==================== Main Entry Point ====================

def main():
    """
    Run the server using uvicorn
    """
    settings = get_settings()
    logger.info("Starting CampusShare Server...")

    uvicorn.run(
        "server:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
