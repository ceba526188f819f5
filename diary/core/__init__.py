"""Core: config, lifespan, exception handlers, and rate limiting.

Single place for settings and application bootstrap.
"""

from diary.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
