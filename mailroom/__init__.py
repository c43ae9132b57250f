"""Mailbox storage helpers: thread records, trash handling, new-mail notifications, HTML-to-text and attribute-value codecs."""

__version__ = "0.1.0"

__all__ = [
    "attrvalue",
    "emails",
    "env",
    "errors",
    "format",
    "hook",
    "htmltext",
    "idutil",
    "model",
    "responses",
    "threads",
]