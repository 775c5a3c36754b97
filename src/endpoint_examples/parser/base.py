"""Data models shared by the parser, the example classifier and the renderers.

The Postman parser converts every request node of a collection into an
Endpoint; the classifier attaches example responses to it.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict

GROUP_SEPARATOR = " / "


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"invalid JSON constant: {name}")


def parse_body(raw: str | None) -> Any | None:
    """Best-effort JSON decode of a raw request body.

    Returns None for a missing, empty or undecodable body; never raises.
    """
    if not raw:
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError):
        return None


def field_count(value: Any) -> int:
    """Number of top-level fields of a parsed body (0 for scalars)."""
    if isinstance(value, (dict, list)):
        return len(value)
    return 0


class Endpoint(BaseModel):
    """A single request node of a collection, flattened and normalized."""

    model_config = ConfigDict(frozen=True)

    group: str = ""
    name: str = ""
    method: str = "GET"
    headers: dict[str, str] = {}
    body_raw: str | None = None
    url_raw: str = ""

    @classmethod
    def from_item(cls, item: dict, group_path: tuple[str, ...] = ()) -> "Endpoint":
        """Build an Endpoint from a leaf node, filling every absent field."""
        req = item["request"]
        if isinstance(req, str):
            # Postman shorthand: the request is just a URL
            req = {"url": req}
        elif not isinstance(req, dict):
            req = {}

        url_raw = req.get("url")
        if isinstance(url_raw, dict):
            url_raw = url_raw.get("raw")

        body = req.get("body")
        body_raw = body.get("raw") if isinstance(body, dict) else None

        return cls(
            group=GROUP_SEPARATOR.join(group_path),
            name=str(item.get("name") or ""),
            method=str(req.get("method") or "GET"),
            headers=_collect_headers(req.get("header")),
            body_raw=body_raw if isinstance(body_raw, str) and body_raw else None,
            url_raw=url_raw if isinstance(url_raw, str) else "",
        )

    @property
    def verb(self) -> str:
        """Upper-cased method, used for rule matching."""
        return self.method.upper()

    @property
    def parsed_body(self) -> Any | None:
        return parse_body(self.body_raw)


def _collect_headers(headers: list | None) -> dict[str, str]:
    result: dict[str, str] = {}
    if not isinstance(headers, list):
        return result
    for h in headers:
        if not isinstance(h, dict) or not h.get("key"):
            continue
        value = h.get("value")
        result[str(h["key"])] = "" if value is None else str(value)
    return result


class ExampleResponse(BaseModel):
    """An example HTTP response: status code plus JSON body."""

    status: int
    body: Any


class SuccessExample(ExampleResponse):
    pass


class ErrorExample(ExampleResponse):
    pass


class DocumentedEndpoint(BaseModel):
    """An endpoint together with its inferred success and error examples."""

    endpoint: Endpoint
    success: SuccessExample
    errors: list[ErrorExample]
