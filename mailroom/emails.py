"""Moving single emails into and out of the trash."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from . import env
from .errors import (
    ConditionalCheckFailedError,
    NotTrashedError,
    ProvisionedThroughputExceededError,
    TooManyRequestsError,
)
from .format import rfc3339
from .model import EmailType

logger = logging.getLogger(__name__)


class UpdateItemClient(Protocol):
    """A table client that can update one item."""

    def update_item(self, **kwargs: Any) -> Any: ...


def _update(client: UpdateItemClient, message_id: str, **kwargs: Any) -> None:
    try:
        client.update_item(
            table_name=env.table_name(),
            key={"MessageID": {"S": message_id}},
            **kwargs,
        )
    except ConditionalCheckFailedError as exc:
        raise NotTrashedError("email") from exc
    except ProvisionedThroughputExceededError as exc:
        raise TooManyRequestsError() from exc


def trash(client: UpdateItemClient, message_id: str) -> None:
    """Mark an email as trashed. Drafts and already trashed emails are refused."""
    _update(
        client,
        message_id,
        update_expression="SET TrashedTime = :val1",
        condition_expression=(
            "attribute_not_exists(TrashedTime) AND NOT begins_with(TypeYearMonth, :v_type)"
        ),
        expression_attribute_values={
            ":val1": {"S": rfc3339(datetime.now(timezone.utc))},
            ":v_type": {"S": EmailType.DRAFT.value},
        },
    )
    logger.info("trash method finished successfully")


def untrash(client: UpdateItemClient, message_id: str) -> None:
    """Restore a trashed email. Drafts and emails not in the trash are refused."""
    _update(
        client,
        message_id,
        update_expression="REMOVE TrashedTime",
        condition_expression=(
            "attribute_exists(TrashedTime) AND NOT begins_with(TypeYearMonth, :v_type)"
        ),
        expression_attribute_values={":v_type": {"S": EmailType.DRAFT.value}},
    )
    logger.info("untrash method finished successfully")