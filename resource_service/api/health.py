"""
Health and operational API endpoints
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from resource_service.cache.resource_cache import ResourceCache
from resource_service.core.config import config
from resource_service.dependencies.resource import get_resource_cache
from resource_service.schemas.resource import CacheStatsResponse

router = APIRouter()

# Track service start time
start_time = time.time()


@router.get("/health")
def health_check():
    """Basic health check endpoint"""
    return {
        "status": "UP",
        "service": config.service_name,
        "version": config.service_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/info")
def service_info():
    """Service information"""
    return {
        "name": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
        "description": config.service_description,
        "uptimeSeconds": round(time.time() - start_time, 3),
    }


@router.get("/operational/cache", response_model=CacheStatsResponse)
def cache_stats(cache: ResourceCache = Depends(get_resource_cache)):
    """Read cache statistics"""
    return cache.stats()
