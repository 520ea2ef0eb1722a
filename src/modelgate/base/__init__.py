"""Shared base classes.

Exposes:
- `Loggable`: mixin attaching a class-scoped logger
"""

from .loggable import Loggable

__all__ = ["Loggable"]
