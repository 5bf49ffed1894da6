"""
OpenTelemetry instrumentation for FastAPI and SQLAlchemy

Creates spans for incoming requests and database statements. Export is
configured through the standard OTEL_* environment variables.
"""

from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

from app.core.config import config
from app.core.logger import logger


def init_telemetry():
    """Install a tracer provider tagged with the service name and version"""
    resource = Resource.create({
        "service.name": config.service_name,
        "service.version": config.service_version,
        "deployment.environment": config.environment,
    })
    trace.set_tracer_provider(TracerProvider(resource=resource))
    logger.info("OpenTelemetry tracer provider initialized")


def instrument_app(app):
    """
    Instrument FastAPI application with OpenTelemetry for automatic span creation.

    Args:
        app: FastAPI application instance
    """
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumented with OpenTelemetry")
    except Exception as e:
        logger.error(f"Failed to instrument application: {e}", error=e)


def instrument_engine(engine):
    """
    Instrument a SQLAlchemy async engine.

    Args:
        engine: AsyncEngine whose statements should be traced
    """
    try:
        SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)
        logger.info("SQLAlchemy engine instrumented with OpenTelemetry")
    except Exception as e:
        logger.error(f"Failed to instrument database engine: {e}", error=e)
