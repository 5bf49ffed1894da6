"""
Health check API endpoints
"""

import asyncio
import time
from datetime import datetime
from typing import Any, Dict, List

import psutil
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.operational import start_time
from app.core.config import config
from app.core.logger import logger
from app.db.session import db, ping_database
from app.events.publisher import event_publisher

router = APIRouter()


@router.get("/health")
def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "version": config.api_version,
    }


@router.get("/health/live")
def liveness_check():
    """Liveness probe - check if the app is running"""
    return {
        "status": "alive",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "uptime": time.time() - start_time,
    }


@router.get("/health/ready")
async def readiness_check():
    """Readiness probe - the database must be reachable; a broker outage only degrades"""
    checks = await perform_health_checks()
    failed_checks = [check for check in checks if check["status"] == "unhealthy"]

    if not failed_checks:
        return {
            "status": "ready",
            "service": config.service_name,
            "timestamp": datetime.now().isoformat(),
            "checks": checks,
        }

    logger.warning(
        f"Readiness check failed - {len(failed_checks)} checks failed",
        metadata={
            "failed_checks": [check["name"] for check in failed_checks],
            "event": "readiness_check_failed"
        }
    )
    return JSONResponse(
        status_code=503,
        content={
            "status": "not ready",
            "service": config.service_name,
            "timestamp": datetime.now().isoformat(),
            "checks": checks,
            "errors": [f"{check['name']}: {check.get('error', 'Unknown error')}" for check in failed_checks],
        },
    )


async def perform_health_checks() -> List[Dict[str, Any]]:
    """Run all dependency checks concurrently"""
    results = await asyncio.gather(
        check_database_health(),
        check_message_broker_health(),
        check_system_resources(),
        return_exceptions=True,
    )

    checks = []
    for result in results:
        if isinstance(result, Exception):
            checks.append({
                "name": "unknown_check",
                "status": "unhealthy",
                "error": str(result),
                "timestamp": datetime.now().isoformat(),
            })
        else:
            checks.append(result)
    return checks


async def check_database_health() -> Dict[str, Any]:
    """Check relational database connectivity"""
    check_start = time.time()
    try:
        await ping_database()
        response_time_ms = (time.time() - check_start) * 1000
        return {
            "name": "database",
            "status": "healthy",
            "dialect": db.engine.dialect.name,
            "response_time_ms": round(response_time_ms, 2),
            "timestamp": datetime.now().isoformat(),
        }
    except Exception as e:
        response_time_ms = (time.time() - check_start) * 1000
        logger.error(
            f"Database health check failed: {e}",
            metadata={"response_time_ms": response_time_ms, "event": "health_check_database_failed"}
        )
        return {
            "name": "database",
            "status": "unhealthy",
            "error": str(e),
            "response_time_ms": round(response_time_ms, 2),
            "timestamp": datetime.now().isoformat(),
        }


async def check_message_broker_health() -> Dict[str, Any]:
    """Kafka producer state; non-critical for serving requests"""
    result = {
        "name": "message_broker",
        "topic": event_publisher.topic,
        "timestamp": datetime.now().isoformat(),
    }
    if not event_publisher.enabled:
        result["status"] = "disabled"
    elif event_publisher.is_healthy():
        result["status"] = "healthy"
    else:
        result["status"] = "degraded"
        result["error"] = "Kafka producer not started"
    return result


async def check_system_resources() -> Dict[str, Any]:
    """Check system resources (memory, CPU, disk space)"""
    process = psutil.Process()
    memory_info = process.memory_info()
    cpu_percent = process.cpu_percent()
    system_memory = psutil.virtual_memory()
    disk_usage = psutil.disk_usage('/')

    warnings = []
    if system_memory.percent > 90:
        warnings.append(f"High system memory usage: {system_memory.percent:.1f}%")
    if disk_usage.percent > 85:
        warnings.append(f"High disk usage: {disk_usage.percent:.1f}%")
    if cpu_percent > 95:
        warnings.append(f"High CPU usage: {cpu_percent:.1f}%")

    result = {
        "name": "system_resources",
        "status": "healthy" if not warnings else "degraded",
        "metrics": {
            "process_memory_mb": round(memory_info.rss / 1024 / 1024, 2),
            "process_cpu_percent": round(cpu_percent, 2),
            "system_memory_percent": round(system_memory.percent, 2),
            "disk_usage_percent": round(disk_usage.percent, 2),
            "uptime_seconds": round(time.time() - start_time, 2),
        },
        "timestamp": datetime.now().isoformat(),
    }
    if warnings:
        result["warnings"] = warnings
    return result
