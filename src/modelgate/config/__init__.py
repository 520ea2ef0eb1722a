"""Configuration package exports.

Exposes:
- `Settings`: Pydantic settings for application configuration
- `EnvironmentSnapshot`: immutable process-wide environment captured at startup
"""

from .environment import EnvironmentSnapshot
from .settings import Settings

__all__ = ["Settings", "EnvironmentSnapshot"]
