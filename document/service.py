from __future__ import annotations
import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from core.config_loader import settings
from core.errors import ValidationError
from .schema import DocumentRef

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png"}
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png"}


def _read_checked(upload: UploadFile, max_bytes: int, allowed: set[str] = ALLOWED_EXTENSIONS) -> bytes:
    ext = os.path.splitext(upload.filename or "")[1].lower()
    if ext not in allowed:
        names = ", ".join(sorted(e.lstrip(".").upper() for e in allowed))
        raise ValidationError(f"Invalid file type: {ext or 'none'}. Allowed types: {names}.")
    content = upload.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError(f"File size too large. Maximum size is {max_bytes // (1024 * 1024)}MB.")
    return content


def store_documents(uploads: list[UploadFile], upload_dir: Optional[str] = None) -> list[DocumentRef]:
    """
    Validate every upload first, then write them under `upload_dir` with
    unique names. Nothing is written when any file is rejected.
    """
    if not uploads:
        raise ValidationError("No files were uploaded.")
    if len(uploads) > settings.MAX_UPLOAD_FILES:
        raise ValidationError(f"Too many files. At most {settings.MAX_UPLOAD_FILES} files per upload.")

    contents = [_read_checked(u, settings.MAX_UPLOAD_BYTES) for u in uploads]

    target = Path(upload_dir or settings.UPLOAD_DIR)
    target.mkdir(parents=True, exist_ok=True)
    refs: list[DocumentRef] = []
    for upload, content in zip(uploads, contents):
        ext = os.path.splitext(upload.filename)[1].lower()
        stored = target / f"{uuid.uuid4().hex}{ext}"
        stored.write_bytes(content)
        refs.append(DocumentRef(
            filename=upload.filename,
            path=stored.as_posix(),
            uploaded_at=datetime.now(timezone.utc),
        ))
    logger.info("Stored %d document(s) in %s", len(refs), target)
    return refs


def check_stored_path(path: str, upload_dir: Optional[str] = None) -> str:
    """Reject attachment paths that do not point inside the upload directory."""
    root = Path(upload_dir or settings.UPLOAD_DIR).resolve()
    resolved = Path(path).resolve()
    if resolved == root or not resolved.is_relative_to(root):
        raise ValidationError(f"Document path is outside the upload directory: {path}")
    return path


def store_image(upload: UploadFile, upload_dir: str) -> str:
    """Validate and write a single JPG/PNG under `upload_dir`; returns its stored path."""
    content = _read_checked(upload, settings.MAX_UPLOAD_BYTES, IMAGE_EXTENSIONS)
    target = Path(upload_dir)
    target.mkdir(parents=True, exist_ok=True)
    stored = target / f"{uuid.uuid4().hex}{os.path.splitext(upload.filename)[1].lower()}"
    stored.write_bytes(content)
    logger.info("Stored image %s", stored)
    return stored.as_posix()
