"""Search root adapters for the build pipeline.

This package contains base classes and interfaces for search roots.
Concrete implementations live in the platforms/ directory.
"""

from .base import ModMedia, Source

__all__ = ["Source", "ModMedia"]
