"""
Upload Service.

Validation and storage for multipart uploads: avatar images kept on the user
row and Word documents written to the configured upload directory.
"""

from __future__ import annotations

import re
import uuid
from pathlib import Path
from typing import Optional, Pattern

from fastapi import UploadFile

from taskmanager.core.errors import UploadRejectedError
from taskmanager.core.logging_config import get_logger
from taskmanager.core.models.io import DocumentUploadRead
from taskmanager.server.core.config import UploadConfig, settings

logger = get_logger(__name__)

AVATAR_PATTERN = re.compile(r"\.(jpg|jpeg|png)$", re.IGNORECASE)
DOCUMENT_PATTERN = re.compile(r"\.(doc|docx)$", re.IGNORECASE)

AVATAR_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}


def validate_upload(
    filename: Optional[str],
    size: int,
    *,
    pattern: Pattern[str],
    rejection_message: str,
    max_bytes: int,
) -> str:
    """Check an upload's file name and size.

    Args:
        filename: Client-supplied file name
        size: Number of bytes received
        pattern: Regex the file name must match (by extension)
        rejection_message: Message used when the name does not match
        max_bytes: Largest accepted size

    Returns:
        The lowercased extension, without the dot

    Raises:
        UploadRejectedError: If the type or size is not accepted.
    """
    match = pattern.search(filename or "")
    if match is None:
        raise UploadRejectedError(rejection_message, details={"filename": filename})
    if size > max_bytes:
        raise UploadRejectedError("File too large", details={"size": size, "max_bytes": max_bytes})
    return match.group(1).lower()


async def read_limited(upload: UploadFile, max_bytes: int) -> tuple[bytes, int]:
    """Read at most ``max_bytes + 1`` bytes of an upload.

    One byte past the limit is enough for ``validate_upload`` to reject the
    file, so an oversized upload is never buffered whole. When the declared
    ``upload.size`` is already over the limit nothing is read.

    Returns:
        ``(data, size)`` where ``size`` is what the size check should see
    """
    if upload.size is not None and upload.size > max_bytes:
        return b"", upload.size
    data = await upload.read(max_bytes + 1)
    return data, len(data)


async def read_avatar(upload: UploadFile, config: Optional[UploadConfig] = None) -> tuple[bytes, str]:
    """Read and validate an avatar upload.

    Returns:
        ``(image_bytes, content_type)``
    """
    cfg = config or settings.uploads
    data, size = await read_limited(upload, cfg.max_upload_bytes)
    extension = validate_upload(
        upload.filename,
        size,
        pattern=AVATAR_PATTERN,
        rejection_message="Please upload an image",
        max_bytes=cfg.max_upload_bytes,
    )
    return data, AVATAR_CONTENT_TYPES[extension]


async def store_document(upload: UploadFile, config: Optional[UploadConfig] = None) -> DocumentUploadRead:
    """Validate a Word document upload and write it under a generated name."""
    cfg = config or settings.uploads
    data, size = await read_limited(upload, cfg.max_upload_bytes)
    extension = validate_upload(
        upload.filename,
        size,
        pattern=DOCUMENT_PATTERN,
        rejection_message="Please upload a Word document",
        max_bytes=cfg.max_upload_bytes,
    )
    target_dir = Path(cfg.upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}.{extension}"
    (target_dir / stored_name).write_bytes(data)
    logger.info(f"Stored document {upload.filename!r} as {stored_name} ({len(data)} bytes)")
    return DocumentUploadRead(filename=stored_name, original_filename=upload.filename or "", size=len(data))
