"""Version identifier allocation and textual encodings.

Ids are random 128-bit UUIDs with two text forms: the hyphenated
storage form used for blob filenames and the serialized document, and
a compact base58 display form shown in history output.
"""

from __future__ import annotations

from dataclasses import dataclass
import uuid

import base58


@dataclass(frozen=True, order=True)
class VersionId:
    """Immutable opaque version identifier."""

    value: uuid.UUID

    @classmethod
    def new(cls) -> "VersionId":
        """Allocate a fresh random id without consulting existing state."""
        return cls(uuid.uuid4())

    @classmethod
    def from_storage_form(cls, text: str) -> "VersionId":
        """Parse the hyphenated storage form.

        Raises:
            ValueError: If text is not a UUID string.
        """
        return cls(uuid.UUID(text))

    @classmethod
    def from_display_form(cls, text: str) -> "VersionId":
        """Parse the base58 display form.

        Raises:
            ValueError: If text does not decode to exactly 16 bytes.
        """
        raw_bytes = base58.b58decode(text.encode("ascii"))
        if len(raw_bytes) != 16:
            raise ValueError(f"Display id '{text}' does not decode to a 128-bit value.")
        return cls(uuid.UUID(bytes=raw_bytes))

    def storage_form(self) -> str:
        return str(self.value)

    def display_form(self) -> str:
        return base58.b58encode(self.value.bytes).decode("ascii")

    def __str__(self) -> str:
        return self.display_form()


def new_version_id() -> VersionId:
    """Return a fresh version id."""
    return VersionId.new()
