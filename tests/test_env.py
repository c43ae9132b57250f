from mailroom import env

VARIABLES = [
    "REGION",
    "DYNAMODB_TABLE",
    "DYNAMODB_ORIGINAL_INDEX",
    "DYNAMODB_TIME_INDEX",
    "S3_BUCKET",
    "SQS_QUEUE",
    "WEBHOOK_URL",
]


def test_reads_values_from_environment(monkeypatch):
    for variable in VARIABLES:
        monkeypatch.setenv(variable, f"value-of-{variable}")
    assert env.region() == "value-of-REGION"
    assert env.table_name() == "value-of-DYNAMODB_TABLE"
    assert env.gsi_original_index_name() == "value-of-DYNAMODB_ORIGINAL_INDEX"
    assert env.gsi_index_name() == "value-of-DYNAMODB_TIME_INDEX"
    assert env.s3_bucket() == "value-of-S3_BUCKET"
    assert env.queue_name() == "value-of-SQS_QUEUE"
    assert env.webhook_url() == "value-of-WEBHOOK_URL"


def test_missing_variables_are_empty(monkeypatch):
    for variable in VARIABLES:
        monkeypatch.delenv(variable, raising=False)
    assert env.region() == ""
    assert env.table_name() == ""
    assert env.gsi_original_index_name() == ""
    assert env.gsi_index_name() == ""
    assert env.s3_bucket() == ""
    assert env.queue_name() == ""
    assert env.webhook_url() == ""


def test_changes_are_seen_on_next_call(monkeypatch):
    monkeypatch.setenv("SQS_QUEUE", "first-queue")
    assert env.queue_name() == "first-queue"
    monkeypatch.setenv("SQS_QUEUE", "second-queue")
    assert env.queue_name() == "second-queue"