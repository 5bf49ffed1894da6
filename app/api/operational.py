"""
Operational and monitoring API endpoints
Provides metrics, version info, and other operational endpoints
"""

import os
import platform
import time
from datetime import datetime

import psutil
from fastapi import APIRouter

from app.core.config import config
from app.core.logger import logger

router = APIRouter()

# Track service start time
start_time = time.time()


@router.get("/metrics")
def get_metrics():
    """
    Process and host metrics for monitoring tools.
    """
    process = psutil.Process()
    memory_info = process.memory_info()
    system_memory = psutil.virtual_memory()
    disk_usage = psutil.disk_usage('/')

    logger.debug(
        "Metrics endpoint called",
        metadata={"event": "metrics_requested", "memory_percent": system_memory.percent}
    )

    return {
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "uptime_seconds": round(time.time() - start_time, 2),
        "process": {
            "pid": os.getpid(),
            "memory_rss_bytes": memory_info.rss,
            "memory_vms_bytes": memory_info.vms,
            "memory_rss_mb": round(memory_info.rss / 1024 / 1024, 2),
            "cpu_percent": process.cpu_percent(),
        },
        "system": {
            "memory_total_bytes": system_memory.total,
            "memory_available_bytes": system_memory.available,
            "memory_used_percent": round(system_memory.percent, 2),
            "disk_total_bytes": disk_usage.total,
            "disk_used_bytes": disk_usage.used,
            "disk_used_percent": round(disk_usage.percent, 2),
        },
        "runtime": {
            "python_version": platform.python_version(),
            "platform": platform.system().lower(),
        }
    }


@router.get("/version")
def get_version():
    """
    Service version information for deployment tracking.
    """
    return {
        "service": config.service_name,
        "version": config.service_version,
        "api_version": config.api_version,
        "environment": config.environment,
        "timestamp": datetime.now().isoformat(),
    }


@router.get("/info")
def get_service_info():
    """
    Service information for discovery and debugging. Credentials are never included.
    """
    return {
        "service": config.service_name,
        "version": config.service_version,
        "api_version": config.api_version,
        "environment": config.environment,
        "uptime_seconds": round(time.time() - start_time, 2),
        "configuration": {
            "database_dialect": config.database_url.split(":", 1)[0],
            "kafka_enabled": config.kafka_enabled,
            "kafka_bootstrap_servers": config.kafka_servers,
            "kafka_topic": config.kafka_topic,
            "log_level": config.log_level,
        },
        "timestamp": datetime.now().isoformat(),
    }
