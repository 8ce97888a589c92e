"""
Document handling service.

Validates uploaded schedule documents and encodes them as data URIs so
they can be embedded in a JSON request body.
"""

import asyncio
import base64
import binascii
import logging
import re
from pathlib import Path
from typing import BinaryIO

from .exceptions import InvalidInputError, ReadError

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

_DATA_URI_RE = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)?;base64,(?P<payload>.*)$",
    re.DOTALL,
)


class DocumentService:
    """
    Service for reading, validating and encoding schedule documents.

    Documents are held fully in memory; multi-page schedules of a few
    tens of megabytes fit comfortably.
    """

    def __init__(self, media_type: str = PDF_MEDIA_TYPE):
        """
        Initialize the document service.

        Args:
            media_type: Media type embedded in the produced data URIs.
        """
        self.media_type = media_type

    def read_bytes(self, source: bytes | BinaryIO | str | Path) -> bytes:
        """
        Read a document to completion.

        Args:
            source: Raw bytes, a binary file-like object, or a filesystem path.

        Returns:
            The document content.

        Raises:
            ReadError: If the read fails or the stream was closed.
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source)

        try:
            if isinstance(source, (str, Path)):
                return Path(source).read_bytes()
            data = source.read()
        except (OSError, ValueError) as e:
            # ValueError: I/O operation on closed file
            logger.error("Could not read document: %s", e)
            raise ReadError(f"Could not read document: {e}") from e

        if not isinstance(data, (bytes, bytearray)):
            raise ReadError("Document stream did not return bytes")
        return bytes(data)

    async def read_document(self, source: bytes | BinaryIO | str | Path) -> bytes:
        """Awaitable read-to-completion; the blocking read runs in a worker thread."""
        return await asyncio.to_thread(self.read_bytes, source)

    def ensure_pdf(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> None:
        """
        Check that a document is a non-empty PDF.

        Args:
            data: Document content.
            filename: Original filename, checked for a .pdf extension.
            content_type: Declared media type, if any.

        Raises:
            InvalidInputError: If any of the checks fail.
        """
        if filename is not None and not filename.lower().endswith(".pdf"):
            raise InvalidInputError("Please select a valid PDF file")

        if content_type and content_type.split(";")[0].strip().lower() not in (
            PDF_MEDIA_TYPE,
            "application/octet-stream",
        ):
            raise InvalidInputError(
                f"Unsupported media type '{content_type}', expected {PDF_MEDIA_TYPE}"
            )

        if not data:
            raise InvalidInputError("Empty file provided")

        # Validate PDF magic bytes
        if not data[:4] == b"%PDF":
            raise InvalidInputError("Invalid PDF file: does not start with PDF header")

    def encode(self, source: bytes | BinaryIO | str | Path) -> str:
        """
        Encode a document as a self-describing data URI.

        Args:
            source: Raw bytes, a binary file-like object, or a filesystem path.

        Returns:
            ``data:<media type>;base64,<payload>``

        Raises:
            ReadError: If the document cannot be read.
        """
        data = self.read_bytes(source)
        payload = base64.b64encode(data).decode("ascii")
        logger.debug("Encoded document (%d bytes, %d chars)", len(data), len(payload))
        return f"data:{self.media_type};base64,{payload}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """
    Split a base64 data URI into its media type and raw bytes.

    Raises:
        ValueError: If ``uri`` is not a base64 data URI.
    """
    match = _DATA_URI_RE.match(uri)
    if not match:
        raise ValueError("Not a base64 data URI")
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return match.group("media_type") or "text/plain", data


# Singleton instance for convenience
_document_service: DocumentService | None = None


def get_document_service() -> DocumentService:
    """Get or create the document service singleton."""
    global _document_service
    if _document_service is None:
        _document_service = DocumentService()
    return _document_service


def encode_document(
    source: bytes | BinaryIO | str | Path, media_type: str = PDF_MEDIA_TYPE
) -> str:
    """Encode ``source`` as a data URI with the given media type."""
    return DocumentService(media_type=media_type).encode(source)


async def read_document(source: bytes | BinaryIO | str | Path) -> bytes:
    """Read ``source`` to completion without blocking the event loop."""
    return await get_document_service().read_document(source)


def ensure_pdf(
    data: bytes, filename: str | None = None, content_type: str | None = None
) -> None:
    """Raise InvalidInputError unless ``data`` is a non-empty PDF."""
    get_document_service().ensure_pdf(data, filename=filename, content_type=content_type)
