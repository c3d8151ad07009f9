"""
Service health reporting
"""

import os
import time
from datetime import datetime
from typing import Any, Dict

import psutil
from pydantic import BaseModel, ConfigDict

from app.core.config import settings


class ServiceHealth(BaseModel):
    """Service health status model"""

    status: str
    timestamp: datetime
    uptime: float
    memory_usage: Dict[str, Any]
    vision_provider: str

    model_config = ConfigDict()


class HealthChecker:
    """Process-level health check; never touches the network"""

    def __init__(self):
        self.start_time = time.time()
        self._process = psutil.Process(os.getpid())

    def get_memory_info(self) -> Dict[str, Any]:
        """Resident memory of this process and overall system pressure"""
        rss = self._process.memory_info().rss
        system = psutil.virtual_memory()
        return {
            "process_rss": rss,
            "system_percentage": system.percent,
        }

    def get_service_health(self) -> ServiceHealth:
        memory = self.get_memory_info()
        status = "healthy"
        if memory["system_percentage"] > 90:
            status = "unhealthy"
        elif memory["system_percentage"] > 80:
            status = "warning"

        return ServiceHealth(
            status=status,
            timestamp=datetime.now(),
            uptime=time.time() - self.start_time,
            memory_usage=memory,
            vision_provider=settings.vision_provider,
        )


# Global health checker instance
health_checker = HealthChecker()
