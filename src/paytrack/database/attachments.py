"""File storage for payment attachments."""

import time
from pathlib import Path
from typing import Callable, Union

import structlog

from paytrack.domain.entities import AttachmentSlot
from paytrack.domain.errors import (
    AttachmentIOError,
    NotFoundError,
    ValidationError,
    attachment_not_found,
)

logger = structlog.get_logger(__name__)

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class AttachmentStore:
    """Stores attachment files under a single uploads directory.

    Stored names are built as ``{slot}-{epoch_millis}-{original_name}``. A
    counter is inserted after the timestamp when that name is already taken,
    so an existing file is never overwritten.
    """

    def __init__(
        self,
        uploads_dir: Union[str, Path],
        max_bytes: int = DEFAULT_MAX_BYTES,
        clock: Callable[[], int] = _epoch_millis,
    ):
        """Initialize attachment store.

        Args:
            uploads_dir: Directory holding stored files (created if missing)
            max_bytes: Largest accepted upload
            clock: Returns the current time in epoch milliseconds
        """
        self.uploads_dir = Path(uploads_dir).resolve()
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        self.max_bytes = max_bytes
        self._clock = clock

    def save(self, data: bytes, original_name: str, slot: AttachmentSlot) -> str:
        """Persist an uploaded file.

        Args:
            data: File content
            original_name: Client-side file name; only its final path
                component is kept
            slot: Attachment slot the file is stored for

        Returns:
            Stored file name, relative to the uploads directory

        Raises:
            ValidationError: If the name is empty or the file is too large
            AttachmentIOError: If the file cannot be written
        """
        slot = AttachmentSlot(slot)
        base_name = Path(original_name.replace("\\", "/")).name.strip()
        if not base_name or base_name in (".", ".."):
            raise ValidationError("Attachment file name is required", field=slot.value)
        if len(data) > self.max_bytes:
            raise ValidationError(
                f"Attachment '{base_name}' exceeds the {self.max_bytes} byte limit",
                field=slot.value,
            )

        timestamp = self._clock()
        stored_name = f"{slot.value}-{timestamp}-{base_name}"
        counter = 1
        while True:
            target = self.uploads_dir / stored_name
            try:
                fh = open(target, "xb")
            except FileExistsError:
                stored_name = f"{slot.value}-{timestamp}-{counter}-{base_name}"
                counter += 1
                continue
            except OSError as e:
                raise AttachmentIOError(f"Could not save attachment '{base_name}': {e}") from e
            try:
                with fh:
                    fh.write(data)
            except OSError as e:
                # Remove the partially written file created above
                target.unlink(missing_ok=True)
                raise AttachmentIOError(f"Could not save attachment '{base_name}': {e}") from e
            break

        logger.info("attachment_saved", stored_name=stored_name, slot=slot.value, size=len(data))
        return stored_name

    def resolve(self, stored_name: str) -> Path:
        """Return the absolute path for a stored file name.

        Raises:
            ValidationError: If the name points outside the uploads directory
        """
        path = (self.uploads_dir / stored_name).resolve()
        if path.parent != self.uploads_dir:
            raise ValidationError(f"Invalid attachment name '{stored_name}'", field="storedName")
        return path

    def exists(self, stored_name: str) -> bool:
        """Check whether a stored file is present."""
        return self.resolve(stored_name).is_file()

    def read(self, stored_name: str) -> bytes:
        """Read a stored file for serving.

        Raises:
            NotFoundError: If the file does not exist
        """
        path = self.resolve(stored_name)
        if not path.is_file():
            raise NotFoundError(attachment_not_found(stored_name))
        return path.read_bytes()

    def delete(self, stored_name: str) -> bool:
        """Delete a stored file.

        Deleting an absent file succeeds. I/O failures are logged and reported
        through the return value instead of raised.

        Returns:
            True if the file no longer exists, False if removal failed
        """
        try:
            self.resolve(stored_name).unlink(missing_ok=True)
        except (OSError, ValidationError) as e:
            logger.warning("attachment_delete_failed", stored_name=stored_name, error=str(e))
            return False
        logger.info("attachment_deleted", stored_name=stored_name)
        return True
