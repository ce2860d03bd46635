from __future__ import annotations

import logging
import os
import uuid

from ..core.constants import ALLOWED_UPLOAD_TYPES, MAX_UPLOAD_BYTES
from ..core.exceptions import UploadRejected

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/static/uploads"


class UploadService:
    """Stores one image per call under a random name and returns its public path."""

    def __init__(self, upload_dir: str, *, max_bytes: int = MAX_UPLOAD_BYTES):
        self._upload_dir = upload_dir
        self._max_bytes = max_bytes

    def store(self, file_storage) -> str:
        if file_storage is None or not file_storage.filename:
            raise UploadRejected("Keine Datei hochgeladen")

        ext = ALLOWED_UPLOAD_TYPES.get(file_storage.mimetype)
        if not ext:
            raise UploadRejected("Ungültiger Dateityp. Nur JPEG, PNG und WebP erlaubt.")

        data = file_storage.read()
        if len(data) > self._max_bytes:
            raise UploadRejected(f"Datei zu groß. Maximal {self._max_bytes // (1024 * 1024)}MB erlaubt.")

        os.makedirs(self._upload_dir, exist_ok=True)
        name = f"{uuid.uuid4()}{ext}"
        with open(os.path.join(self._upload_dir, name), "wb") as fh:
            fh.write(data)

        logger.info("Stored upload %s (%d bytes)", name, len(data))
        return f"{PUBLIC_PREFIX}/{name}"
