"""File upload validation utilities.

Only the size limit is checked here. An empty upload is passed on and
reported by the analysis service as invalid input. The content type is
forwarded to the provider unchanged; the provider decides what it can read.
"""

import logging
import os

from fastapi import UploadFile

from docanalysis.core.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


def _get_file_size(file: UploadFile) -> int:
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


def _validate_file_size(size: int, max_size_mb: int) -> None:
    if size > max_size_mb * 1024 * 1024:
        raise PayloadTooLargeError(
            max_size_mb=max_size_mb,
            actual_size_mb=size / (1024 * 1024),
        )


async def read_upload_file(file: UploadFile, max_size_mb: int) -> bytes:
    """Validate and read an uploaded file.

    Args:
        file: FastAPI UploadFile object
        max_size_mb: Upper size limit

    Returns:
        The file content, possibly empty

    Raises:
        PayloadTooLargeError: If the file exceeds the size limit
    """
    file_size = _get_file_size(file)
    _validate_file_size(file_size, max_size_mb)

    content = await file.read()
    logger.info(
        "Processing file: %s, Size: %.2fMB, content_type=%s",
        file.filename,
        file_size / 1024 / 1024,
        file.content_type,
    )
    return content
