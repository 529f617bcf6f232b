"""Participant photo uploads."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Protocol
from uuid import UUID

from team_wrapped.domain.errors import InvalidInput

logger = logging.getLogger(__name__)


class PhotoStorage(Protocol):
    """Object storage for participant photos."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store the payload and return its public URL."""


@dataclass
class PhotoService:
    """Validates photos and forwards them to object storage."""

    storage: PhotoStorage
    max_bytes: int = 5 * 1024 * 1024

    def upload_photo(
        self,
        participant_id: UUID,
        filename: str | None,
        content_type: str | None,
        content: bytes,
        now: datetime | None = None,
    ) -> str:
        """Upload a participant photo and return its public URL."""
        if not content:
            raise InvalidInput("A file is required")
        if not content_type or not content_type.startswith("image/"):
            raise InvalidInput("Only images are allowed")
        if len(content) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise InvalidInput(f"File too large (max {limit_mb}MB)")
        stamp = int((now or datetime.now(tz=UTC)).timestamp() * 1000)
        path = f"{participant_id}-{stamp}.{_extension(filename, content_type)}"
        url = self.storage.upload(path, content, content_type)
        logger.info(
            "Photo uploaded",
            extra={"participant_id": str(participant_id), "path": path},
        )
        return url


def _extension(filename: str | None, content_type: str) -> str:
    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    if suffix:
        return suffix
    return content_type.split("/", maxsplit=1)[1].split(";")[0] or "bin"
