"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .quota_service import QuotaService
from .refresh_service import RefreshResult, RefreshService
from .toggle_service import ToggleService

__all__ = [
    "JWTService",
    "QuotaService",
    "RefreshResult",
    "RefreshService",
    "Service",
    "ToggleService",
]
