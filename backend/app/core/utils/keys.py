import os
import re
import unicodedata
import uuid
from dataclasses import dataclass

from app.core.validations.exceptions import RequestValidationError


@dataclass(frozen=True)
class CompositeKey:
    """Identifier of a (user, event) pair record such as an attendance."""

    user_id: str
    event_id: str

    SEPARATOR = ":"

    @classmethod
    def parse(cls, token: str, kind: str = "attendance") -> "CompositeKey":
        parts = token.split(cls.SEPARATOR) if token else []
        if len(parts) != 2 or not all(part.strip() for part in parts):
            raise RequestValidationError(
                f'Invalid {kind} ID format - must be "userId:eventId"'
            )
        return cls(user_id=parts[0].strip(), event_id=parts[1].strip())

    def __str__(self):
        return f"{self.user_id}{self.SEPARATOR}{self.event_id}"


def generate_object_name(filename: str | None, prefix: str = "") -> str:
    """Build a unique, storage-safe object name keeping the original extension."""
    stem, extension = os.path.splitext(filename or "")
    stem = (
        unicodedata.normalize("NFKD", stem).encode("ascii", "ignore").decode("utf-8")
    )
    stem = re.sub(r"[^a-zA-Z0-9\s-]", "", stem).strip().lower()
    stem = re.sub(r"[\s-]+", "-", stem) or "file"
    unique_hash = uuid.uuid4().hex[:12]
    return f"{prefix}{stem}-{unique_hash}{extension.lower()}"
