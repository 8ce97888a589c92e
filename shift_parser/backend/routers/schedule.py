"""
Router for schedule parsing endpoints.

Handles:
- PDF upload and schedule extraction
- Reading and clearing the current schedule
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

# Handle both package imports and standalone imports
try:
    from ..models import MAX_EMPLOYEE_FILTER_LENGTH, ScheduleView
    from ..services.exceptions import (
        ExtractionInProgressError,
        InvalidInputError,
        ReadError,
    )
    from ..services.document_service import get_document_service
    from ..services.session import ScheduleSession, get_schedule_session
except ImportError:
    from models import MAX_EMPLOYEE_FILTER_LENGTH, ScheduleView
    from services.exceptions import (
        ExtractionInProgressError,
        InvalidInputError,
        ReadError,
    )
    from services.document_service import get_document_service
    from services.session import ScheduleSession, get_schedule_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("/parse", response_model=ScheduleView)
async def parse_schedule(
    file: Annotated[UploadFile, File(description="PDF shift schedule")],
    employee_name: Annotated[
        str | None,
        Form(
            description="Only extract shifts of this employee",
            max_length=MAX_EMPLOYEE_FILTER_LENGTH,
        ),
    ] = None,
    session: ScheduleSession = Depends(get_schedule_session),
) -> ScheduleView:
    """
    Upload a PDF schedule and extract its shifts.

    The response carries the schedule on success, or a single message when
    nothing matched or the extraction failed.
    """
    if not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No filename provided",
        )

    if session.in_flight:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A schedule is already being parsed",
        )

    try:
        try:
            file_bytes = await file.read()
        except OSError as e:
            raise ReadError(f"Could not read uploaded file: {e}") from e

        logger.info("Processing PDF: %s (%d bytes)", file.filename, len(file_bytes))

        get_document_service().ensure_pdf(
            file_bytes, filename=file.filename, content_type=file.content_type
        )

        return await session.parse(
            file_bytes,
            file.filename,
            employee_filter=employee_name,
            content_type=file.content_type,
        )

    except ExtractionInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (InvalidInputError, ReadError) as e:
        session.select_file(None)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    finally:
        await file.close()


@router.get("", response_model=ScheduleView)
async def get_schedule(
    session: ScheduleSession = Depends(get_schedule_session),
) -> ScheduleView:
    """Return the current schedule slot."""
    return session.view()


@router.delete("", response_model=ScheduleView)
async def clear_schedule(
    session: ScheduleSession = Depends(get_schedule_session),
) -> ScheduleView:
    """Discard the current schedule (e.g. when a new file is selected)."""
    session.clear()
    return session.view()
