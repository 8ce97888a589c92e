"""
Services package for the shift schedule extraction application.

Contains:
- document_service: PDF validation and data URI encoding
- ai: Request building, service client, response decoding and validation
- session: The single current-schedule slot
"""

from .ai import ScheduleExtractor
from .document_service import DocumentService
from .session import ScheduleSession

__all__ = ["DocumentService", "ScheduleExtractor", "ScheduleSession"]
