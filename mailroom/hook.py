"""Notifications about received emails, sent to a queue or a webhook."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Protocol

from . import env

logger = logging.getLogger(__name__)

EVENT_EMAIL = "email"
ACTION_RECEIVED = "received"

WEBHOOK_TIMEOUT = 5.0

_HTML_SAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class SQSClient(Protocol):
    """The queue operations used to send notifications."""

    def get_queue_url(self, queue_name: str) -> str: ...

    def send_message(
        self,
        queue_url: str,
        message_body: str,
        message_attributes: dict[str, dict[str, str]],
    ) -> str: ...


@dataclass
class EmailReceipt:
    """What is needed to announce a received email."""

    message_id: str
    timestamp: str


@dataclass
class Email:
    """The email a notification is about."""

    id: str = ""


@dataclass
class Hook:
    """A notification payload."""

    event: str = ""
    action: str = ""
    timestamp: str = ""
    email: Email = field(default_factory=Email)

    def to_json(self) -> str:
        """Serialise the payload as compact JSON."""
        text = json.dumps(
            {
                "event": self.event,
                "action": self.action,
                "timestamp": self.timestamp,
                "Email": {"id": self.email.id},
            },
            ensure_ascii=False,
            separators=(",", ":"),
        )
        for char, escaped in _HTML_SAFE.items():
            text = text.replace(char, escaped)
        return text


def sqs_enabled() -> bool:
    """Whether a queue is configured."""
    return env.queue_name() != ""


def webhook_enabled() -> bool:
    """Whether a webhook URL is configured."""
    return env.webhook_url() != ""


def send_sqs(client: SQSClient, receipt: EmailReceipt) -> None:
    """Send an email receipt to the queue; does nothing if no queue is configured."""
    if not sqs_enabled():
        return
    logger.info("Sending email receipt (MessageID: %s)", receipt.message_id)
    send_sqs_email_notification(
        client,
        Hook(
            event=EVENT_EMAIL,
            action=ACTION_RECEIVED,
            timestamp=receipt.timestamp,
            email=Email(id=receipt.message_id),
        ),
    )


def send_sqs_email_notification(client: SQSClient, hook: Hook) -> None:
    """Send a notification to the configured queue."""
    try:
        queue_url = client.get_queue_url(env.queue_name())
    except Exception:
        logger.error("Failed to get queue url")
        raise

    try:
        message_id = client.send_message(
            queue_url=queue_url,
            message_body=hook.to_json(),
            message_attributes={
                "Event": {"DataType": "String", "StringValue": hook.event},
                "Timestamp": {"DataType": "String", "StringValue": hook.timestamp},
            },
        )
    except Exception:
        logger.error("Failed to send message to SQS")
        raise

    logger.info("Sent message with ID: %s", message_id)


def send_webhook(hook: Hook) -> None:
    """POST the notification to the webhook URL; does nothing if none is configured.

    Any HTTP response counts as delivered; connection and URL errors are raised.
    """
    if not webhook_enabled():
        return
    request = urllib.request.Request(
        env.webhook_url(),
        data=(hook.to_json() + "\n").encode("utf-8"),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request, timeout=WEBHOOK_TIMEOUT) as response:
            response.read()
    except urllib.error.HTTPError as exc:
        exc.close()