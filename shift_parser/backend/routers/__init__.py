"""
Routers package for FastAPI endpoints.

Organized by domain:
- schedule: Schedule upload, extraction and the current-schedule slot
"""

from . import schedule

__all__ = ["schedule"]
