"""
Core module for toolkit configuration and the index-construction operations.

Note: submodules are not imported at package level so that importing the
settings doesn't pull in scipy. Import them directly:
from composite_index.core.transforms import ... or
from composite_index.core.reliability import ...
"""
from .config import settings

__all__ = ["settings"]
