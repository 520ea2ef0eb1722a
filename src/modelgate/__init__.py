"""modelgate package public API and version.

Exposes convenient imports for external consumers:
- `Settings`: application configuration
- `EnvironmentSnapshot`: process-wide environment captured at startup
- `LLMManager`: provider, model list and model handle facade
- `BaseProvider`: provider interface
"""

__version__ = "1.0.0"

from .config.environment import EnvironmentSnapshot
from .config.settings import Settings
from .llm.manager import LLMManager
from .llm.providers.base import BaseProvider

__all__ = ["Settings", "EnvironmentSnapshot", "LLMManager", "BaseProvider"]
