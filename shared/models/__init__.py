"""
Shared Models
=============

Pydantic response models shared across the service.
"""

from shared.models.common import HealthResponse

__all__ = [
    "HealthResponse",
]
