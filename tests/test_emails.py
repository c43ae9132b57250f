from datetime import datetime, timedelta

import pytest

from mailroom.emails import trash, untrash
from mailroom.errors import (
    ConditionalCheckFailedError,
    NotFoundError,
    NotTrashedError,
    ProvisionedThroughputExceededError,
    TooManyRequestsError,
)


class RecordingClient:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def update_item(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return {}


def test_trash_request(monkeypatch):
    monkeypatch.setenv("DYNAMODB_TABLE", "emails-table")
    client = RecordingClient()
    trash(client, "exampleMessageID")

    assert len(client.calls) == 1
    params = client.calls[0]
    assert params["table_name"] == "emails-table"
    assert params["key"] == {"MessageID": {"S": "exampleMessageID"}}

    assert "=" in params["update_expression"]
    left, right = params["update_expression"].split("=")
    assert left.strip() == "SET TrashedTime"
    assert right.strip() in params["expression_attribute_values"]

    assert params["condition_expression"] == (
        "attribute_not_exists(TrashedTime) AND NOT begins_with(TypeYearMonth, :v_type)"
    )
    assert params["expression_attribute_values"][":v_type"] == {"S": "draft"}


def test_trash_timestamp_is_utc_rfc3339():
    client = RecordingClient()
    trash(client, "exampleMessageID")
    value = client.calls[0]["expression_attribute_values"][":val1"]["S"]
    assert value.endswith("Z")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    assert parsed.utcoffset() == timedelta(0)


@pytest.mark.parametrize("operation", [trash, untrash])
def test_condition_failure_means_not_trashed(operation):
    client = RecordingClient(ConditionalCheckFailedError())
    with pytest.raises(NotTrashedError) as info:
        operation(client, "")
    assert info.value == NotTrashedError("email")
    assert info.value.item_type == "email"


@pytest.mark.parametrize("operation", [trash, untrash])
def test_other_errors_pass_through(operation):
    error = NotFoundError()
    client = RecordingClient(error)
    with pytest.raises(NotFoundError) as info:
        operation(client, "")
    assert info.value is error


@pytest.mark.parametrize("operation", [trash, untrash])
def test_throttling_becomes_too_many_requests(operation):
    client = RecordingClient(ProvisionedThroughputExceededError())
    with pytest.raises(TooManyRequestsError):
        operation(client, "exampleMessageID")


def test_untrash_request(monkeypatch):
    monkeypatch.setenv("DYNAMODB_TABLE", "emails-table")
    client = RecordingClient()
    untrash(client, "exampleMessageID")

    params = client.calls[0]
    assert params["table_name"] == "emails-table"
    assert params["key"] == {"MessageID": {"S": "exampleMessageID"}}
    assert params["update_expression"] == "REMOVE TrashedTime"
    assert params["condition_expression"] == (
        "attribute_exists(TrashedTime) AND NOT begins_with(TypeYearMonth, :v_type)"
    )
    assert params["expression_attribute_values"] == {":v_type": {"S": "draft"}}