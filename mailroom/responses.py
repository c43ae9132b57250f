"""Responses returned from an API gateway proxy integration."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any

_HTML_SAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Response:
    """A proxy integration response."""

    status_code: int
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    is_base64_encoded: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the response in the gateway's JSON shape, omitting empty fields."""
        result: dict[str, Any] = {"statusCode": self.status_code}
        if self.headers:
            result["headers"] = dict(self.headers)
        result["body"] = self.body
        if self.is_base64_encoded:
            result["isBase64Encoded"] = True
        return result


def _marshal(obj: Any) -> str:
    text = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _HTML_SAFE.items():
        text = text.replace(char, escaped)
    return text


def new_binary_response(
    code: int,
    content: bytes,
    content_type: str,
    disposition: str,
    filename: str,
) -> Response:
    """Return a base64-encoded binary response, naming the file if one is given."""
    content_disposition = disposition
    if filename:
        content_disposition += f'; filename="{filename}"'
    return Response(
        status_code=code,
        body=base64.b64encode(bytes(content)).decode("ascii"),
        headers={
            "Content-Type": content_type,
            "Content-Disposition": content_disposition,
        },
        is_base64_encoded=True,
    )


def new_success_json_response(body: str) -> Response:
    """Return a 200 response carrying a JSON body."""
    return Response(
        status_code=200,
        body=body,
        headers={"Content-Type": "application/json"},
    )


def new_error_response(code: int, message: str) -> Response:
    """Return a JSON error response of the form {"message": ...}."""
    return Response(
        status_code=code,
        body=_marshal({"message": message}),
        headers={"Content-Type": "application/json"},
    )