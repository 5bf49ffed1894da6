"""
FastAPI Application - Document Service
CRUD for documents and authors with change events published to Kafka
"""

# Load environment variables from .env file FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import config
from app.core.errors import (
    ErrorResponse,
    error_response_handler,
    http_exception_handler,
    request_validation_handler,
)
from app.core.logger import logger
from app.core.telemetry import init_telemetry, instrument_app
from app.db.session import connect_to_database, close_database_connection
from app.events.publisher import event_publisher
from app.events.topics import declare_topic
from app.api import documents, authors, health, operational, home
from app.middleware import TraceContextMiddleware

# Initialize OpenTelemetry tracing BEFORE creating FastAPI app
init_telemetry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting Document Service...")
    await connect_to_database()
    if config.kafka_enabled:
        await declare_topic()
    await event_publisher.start()

    logger.info(
        "Document Service started successfully",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "port": config.port,
            "kafka_topic": config.kafka_topic,
        }
    )

    yield

    # Shutdown
    logger.info("Shutting down Document Service...")
    await event_publisher.stop()
    await close_database_connection()


app = FastAPI(
    title="Document Service",
    description="Documents and authors with change events on a Kafka topic",
    version=config.service_version,
    lifespan=lifespan
)

# Instrument app with OpenTelemetry for automatic tracing
instrument_app(app)

# Configure error handlers
app.add_exception_handler(ErrorResponse, error_response_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# Add W3C Trace Context middleware
app.add_middleware(TraceContextMiddleware, correlation_id_header=config.correlation_id_header)

# Include API routers
app.include_router(home.router, tags=["home"])
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(operational.router, prefix="/api", tags=["operational"])
app.include_router(documents.router, prefix="/api/v1/documents", tags=["documents"])
app.include_router(authors.router, prefix="/api/v1/authors", tags=["authors"])


if __name__ == "__main__":
    import uvicorn

    logger.info(
        f"Starting {config.service_name} on port {config.port}",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "port": config.port
        }
    )

    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.environment == "development"
    )
