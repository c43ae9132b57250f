"""Email kinds and attachment records, with their table representation.

Attribute values use the typed-dict form of the table's wire format,
for example ``{"S": "text"}``, ``{"M": {...}}`` and ``{"L": [...]}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class EmailType(str, Enum):
    """The kinds of items stored in the email table."""

    INBOX = "inbox"
    SENT = "sent"
    DRAFT = "draft"
    THREAD = "thread"


@dataclass
class File:
    """An attachment or inline part of an email."""

    content_id: str = ""
    content_type: str = ""
    content_type_params: dict[str, str] = field(default_factory=dict)
    filename: str = ""

    def to_attribute_value(self) -> dict[str, Any]:
        """Return the file as a map attribute value."""
        params = {k: {"S": v} for k, v in self.content_type_params.items()}
        return {
            "M": {
                "contentID": {"S": self.content_id},
                "contentType": {"S": self.content_type},
                "contentTypeParams": {"M": params},
                "filename": {"S": self.filename},
            }
        }


def files_to_attribute_value(files: Iterable[File]) -> dict[str, Any]:
    """Return a list attribute value holding each file's map value in order."""
    return {"L": [f.to_attribute_value() for f in files]}