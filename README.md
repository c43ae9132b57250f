# mailroom

Building blocks for a mailbox kept in a key-value table. The package writes
thread records and links e-mails to them, moves e-mails and threads into and
out of the trash, announces received mail through a queue or a webhook,
turns HTML bodies into plain text, and converts table attribute values to and
from a compact JSON form.

It has no third-party dependencies.

## Installation

```
pip install .
```

With the test extra, to run the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

Settings are read from the environment each time they are needed, through
the functions in `mailroom.env`. A missing variable reads as an empty string.

| Variable                  | Function                         |
|---------------------------|----------------------------------|
| `REGION`                  | `env.region()`                   |
| `DYNAMODB_TABLE`          | `env.table_name()`               |
| `DYNAMODB_ORIGINAL_INDEX` | `env.gsi_original_index_name()`  |
| `DYNAMODB_TIME_INDEX`     | `env.gsi_index_name()`           |
| `S3_BUCKET`               | `env.s3_bucket()`                |
| `SQS_QUEUE`               | `env.queue_name()`               |
| `WEBHOOK_URL`             | `env.webhook_url()`              |

Queue notifications are sent only when `SQS_QUEUE` is set
(`hook.sqs_enabled()`), and webhooks only when `WEBHOOK_URL` is set
(`hook.webhook_enabled()`).

## Attribute values

Table items are plain dicts whose values are typed attribute values, each a
dict with one key naming the type: `{"S": "text"}`, `{"N": "1.5"}`,
`{"B": b"..."}`, `{"BOOL": True}`, `{"NULL": True}`, `{"SS": [...]}`,
`{"NS": [...]}`, `{"BS": [...]}`, `{"L": [...]}` and `{"M": {...}}`.

## Modules

- `mailroom.format` – dates and the `type#YYYY-MM` index keys:
  `date` (SMTP Date header to RFC 3339, `""` if unparseable), `rfc3339`,
  `type_year_month`, `date_time` (`DD-hh:mm:ss` in UTC), `rejoin_date` and
  `extract_type_year_month`. Bad keys raise `InvalidFormatForTypeYearMonthError`,
  `InvalidEmailTypeError`, `InvalidEmailYearError` or `InvalidEmailMonthError`,
  all subclasses of `FormatError`.
- `mailroom.attrvalue` – `encode_attribute_value` and `decode_attribute_value`,
  plus one encoder and decoder per type (`encode_s`, `decode_m`, ...).
  Malformed input raises `DecodeError`; malformed base64 in a binary value
  raises `binascii.Error`. The decoder splits on commas and colons, so it
  handles the encoder's output for values without those characters inside.
- `mailroom.model` – the `EmailType` enum (`inbox`, `sent`, `draft`,
  `thread`), the attachment record `File` with `File.to_attribute_value()`,
  and `files_to_attribute_value`.
- `mailroom.idutil` – `generate_thread_id()` returns a random 32-character
  hexadecimal identifier.
- `mailroom.responses` – `Response` (with `to_dict()` in the API gateway's
  JSON shape) and the helpers `new_success_json_response`,
  `new_error_response` and `new_binary_response`.
- `mailroom.hook` – the payload types `EmailReceipt`, `Email` and `Hook`
  (`Hook.to_json()`), `send_sqs`, `send_sqs_email_notification` and
  `send_webhook`. A webhook is a JSON `POST` with a 5 second timeout; any HTTP
  response counts as delivered, while connection and URL errors are raised.
- `mailroom.emails` – `trash` and `untrash` for single e-mails; drafts are
  refused.
- `mailroom.threads` – the `Thread` record, `get_thread`,
  `store_email_with_new_thread`, `store_email_with_existing_thread`, `trash`
  and `untrash`.
- `mailroom.htmltext` – `generate_text` renders HTML as readable plain text,
  with tables drawn as boxes, headings underlined and links shown with their
  targets.
- `mailroom.errors` – `MailboxError` and its subclasses `NotFoundError`,
  `TooManyRequestsError`, `NotTrashedError`, `ConditionalCheckFailedError`
  and `ProvisionedThroughputExceededError`.

## Clients

Functions that talk to the table or the queue take a client as their first
argument; any object with the methods below will do.

- Table reads (`threads.get_thread`): `get_item(table_name=..., key=...)`
  returning the item, or an empty value when there is none.
- Table updates (`emails.trash`, `emails.untrash`, `threads.trash`,
  `threads.untrash`): `update_item(table_name=..., key=...,
  update_expression=..., condition_expression=...,
  expression_attribute_values=...)`.
- Transactions (`threads.store_email_with_*`):
  `transact_write_items(transact_items=[...])`, where each entry holds a
  `"put"` or an `"update"` dict.
- Queues (`hook.send_sqs`): `get_queue_url(queue_name)` returning the URL, and
  `send_message(queue_url=..., message_body=..., message_attributes=...)`
  returning the message id.

A client signals a failed write condition by raising
`ConditionalCheckFailedError` and throttling by raising
`ProvisionedThroughputExceededError`. The trash functions turn these into
`NotTrashedError` and `TooManyRequestsError`; `get_thread` turns throttling
into `TooManyRequestsError` and raises `NotFoundError` when the item is
missing or is not a thread.

## Example

```python
from mailroom import attrvalue, format, threads

format.extract_type_year_month("inbox#2021-01")   # ("inbox", "2021-01")
format.rejoin_date("2022-03", "10-21:00:00")      # "2022-03-10T21:00:00Z"

encoded = attrvalue.encode_attribute_value({"S": "foo"})   # b'{"S":"foo"}'
attrvalue.decode_attribute_value(encoded)                  # {"S": "foo"}


class MemoryTable:
    def __init__(self, items):
        self.items = items

    def get_item(self, table_name, key):
        return self.items.get(key["MessageID"]["S"])


table = MemoryTable({
    "t1": {
        "MessageID": {"S": "t1"},
        "TypeYearMonth": {"S": "thread#2023-02"},
        "Subject": {"S": "subject"},
        "EmailIDs": {"L": [{"S": "id-1"}, {"S": "id-2"}]},
        "TimeUpdated": {"S": "2023-02-18T01:01:01Z"},
    }
})
threads.get_thread(table, "t1").email_ids   # ["id-1", "id-2"]
```

## What it does not do

- It does not decide which thread an incoming e-mail belongs to; the caller
  chooses between `store_email_with_new_thread` and
  `store_email_with_existing_thread` and supplies the thread identifiers.
- It does not load a thread's e-mails along with the thread, and it does not
  delete threads or e-mails.
- It contains no table, queue or object-store client, and no stored e-mail
  contents; the caller provides the clients.
- It has no command-line program and no HTTP server: `mailroom.responses`
  only builds response objects.