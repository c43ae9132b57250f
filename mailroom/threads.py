"""Conversation threads: reading, storing emails into, and trashing threads.

Items use the typed-dict attribute value form, for example ``{"S": "text"}``.
A transaction item is a dict holding either a ``"put"`` entry
(``table_name`` and ``item``) or an ``"update"`` entry (``table_name``,
``key``, ``update_expression`` and optional expression names and values).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, MutableMapping, Optional, Protocol

from . import env
from .errors import (
    ConditionalCheckFailedError,
    NotFoundError,
    NotTrashedError,
    ProvisionedThroughputExceededError,
    TooManyRequestsError,
)
from .format import extract_type_year_month, rfc3339, type_year_month
from .model import EmailType

logger = logging.getLogger(__name__)

AttributeValue = dict[str, Any]
Item = MutableMapping[str, AttributeValue]

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(\.\d+)?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))"
)


class GetItemClient(Protocol):
    """A table client that reads one item; a missing item reads as empty."""

    def get_item(self, **kwargs: Any) -> Optional[Mapping[str, AttributeValue]]: ...


class UpdateItemClient(Protocol):
    """A table client that updates one item."""

    def update_item(self, **kwargs: Any) -> Any: ...


class TransactWriteClient(Protocol):
    """A table client that writes several items in one transaction."""

    def transact_write_items(self, **kwargs: Any) -> Any: ...


@dataclass
class Thread:
    """A group of emails that reply to each other."""

    message_id: str = ""
    type: str = EmailType.THREAD.value
    subject: str = ""
    email_ids: list[str] = field(default_factory=list)
    draft_id: str = ""
    time_updated: str = ""
    trashed_time: Optional[str] = None
    emails: list[Any] = field(default_factory=list)
    draft: Optional[Any] = None


def _string(item: Mapping[str, AttributeValue], name: str) -> Optional[str]:
    value = item.get(name)
    if value is None or "NULL" in value:
        return None
    if "S" not in value:
        raise ValueError(f"attribute {name} is not a string")
    return value["S"]


def _strings(item: Mapping[str, AttributeValue], name: str) -> list[str]:
    value = item.get(name)
    if value is None or "NULL" in value:
        return []
    if "SS" in value:
        return list(value["SS"])
    if "L" in value:
        result = []
        for member in value["L"]:
            if "S" not in member:
                raise ValueError(f"attribute {name} holds a non-string member")
            result.append(member["S"])
        return result
    raise ValueError(f"attribute {name} is not a list of strings")


def _thread_from_item(item: Mapping[str, AttributeValue]) -> Thread:
    return Thread(
        message_id=_string(item, "MessageID") or "",
        type=_string(item, "Type") or EmailType.THREAD.value,
        subject=_string(item, "Subject") or "",
        email_ids=_strings(item, "EmailIDs"),
        draft_id=_string(item, "DraftID") or "",
        time_updated=_string(item, "TimeUpdated") or "",
        trashed_time=_string(item, "TrashedTime"),
    )


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 3339 time")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7)
    microsecond = int((fraction[1:] + "000000")[:6]) if fraction else 0
    if match.group(8):
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(match.group(10)), minutes=int(match.group(11)))
        tz = timezone(-offset if match.group(9) == "-" else offset)
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)


def _key(message_id: str) -> dict[str, AttributeValue]:
    return {"MessageID": {"S": message_id}}


def get_thread(client: GetItemClient, message_id: str) -> Thread:
    """Read a thread by its identifier; raise NotFoundError if it is not a thread."""
    try:
        item = client.get_item(table_name=env.table_name(), key=_key(message_id))
    except ProvisionedThroughputExceededError as exc:
        raise TooManyRequestsError() from exc
    if not item:
        raise NotFoundError()

    email_type, _ = extract_type_year_month(_string(item, "TypeYearMonth") or "")
    if email_type != EmailType.THREAD.value:
        raise NotFoundError()
    return _thread_from_item(item)


def store_email_with_existing_thread(
    client: TransactWriteClient,
    thread_id: str,
    email: Item,
    time_received: str,
    previous_message_id: str,
) -> None:
    """Store an email as the latest of an existing thread.

    The email is marked as the thread's latest, appended to the thread's
    email list, and the previous latest email loses that mark.
    """
    table = env.table_name()
    email["IsThreadLatest"] = {"BOOL": True}
    client.transact_write_items(
        transact_items=[
            {"put": {"table_name": table, "item": email}},
            {
                "update": {
                    "table_name": table,
                    "key": _key(thread_id),
                    "update_expression": (
                        "SET #emails = list_append(#emails, :emails), "
                        "#timeUpdated = :timeUpdated"
                    ),
                    "expression_attribute_names": {
                        "#emails": "EmailIDs",
                        "#timeUpdated": "TimeUpdated",
                    },
                    "expression_attribute_values": {
                        ":emails": {"L": [email["MessageID"]]},
                        ":timeUpdated": {"S": time_received},
                    },
                }
            },
            {
                "update": {
                    "table_name": table,
                    "key": _key(previous_message_id),
                    "update_expression": "REMOVE IsThreadLatest",
                }
            },
        ]
    )


def store_email_with_new_thread(
    client: TransactWriteClient,
    thread_id: str,
    email: Item,
    time_received: str,
    creating_email_id: str,
    creating_subject: str,
    creating_time: str,
) -> None:
    """Store an email, create a thread for it and its predecessor, and link both.

    ``creating_time`` must be an RFC 3339 time; it decides the thread's month.
    """
    created = _parse_rfc3339(creating_time)
    table = env.table_name()
    thread_item = {
        "MessageID": {"S": thread_id},
        "TypeYearMonth": {"S": type_year_month(EmailType.THREAD.value, created)},
        "Subject": {"S": creating_subject},
        "EmailIDs": {"L": [{"S": creating_email_id}, email["MessageID"]]},
        "TimeUpdated": {"S": time_received},
    }

    email["IsThreadLatest"] = {"BOOL": True}
    client.transact_write_items(
        transact_items=[
            {
                "update": {
                    "table_name": table,
                    "key": _key(creating_email_id),
                    "update_expression": "SET #threadID = :threadID",
                    "expression_attribute_names": {"#threadID": "ThreadID"},
                    "expression_attribute_values": {":threadID": {"S": thread_id}},
                }
            },
            {"put": {"table_name": table, "item": email}},
            {"put": {"table_name": table, "item": thread_item}},
        ]
    )


def _update(client: UpdateItemClient, message_id: str, **kwargs: Any) -> None:
    try:
        client.update_item(table_name=env.table_name(), key=_key(message_id), **kwargs)
    except ConditionalCheckFailedError as exc:
        raise NotTrashedError("thread") from exc
    except ProvisionedThroughputExceededError as exc:
        raise TooManyRequestsError() from exc


def trash(client: UpdateItemClient, thread_id: str) -> None:
    """Mark a thread as trashed; an already trashed thread is refused."""
    _update(
        client,
        thread_id,
        update_expression="SET TrashedTime = :val1",
        condition_expression="attribute_not_exists(TrashedTime)",
        expression_attribute_values={
            ":val1": {"S": rfc3339(datetime.now(timezone.utc))},
        },
    )
    logger.info("trash thread finished successfully")


def untrash(client: UpdateItemClient, message_id: str) -> None:
    """Restore a trashed thread; a thread not in the trash is refused."""
    _update(
        client,
        message_id,
        update_expression="REMOVE TrashedTime",
        condition_expression="attribute_exists(TrashedTime)",
    )
    logger.info("untrash thread finished successfully")