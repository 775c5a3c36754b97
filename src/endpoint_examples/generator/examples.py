"""Example generator — infers success and error responses from an endpoint's shape.

The backend is never called. Each endpoint is matched against two ordered
rule tables built from its method, URL and request body:

* SUCCESS_RULES: evaluated top to bottom, the first matching rule wins.
* ERROR_RULES: every matching rule contributes its errors, in table order,
  until a terminal rule matches.
"""

import re
from typing import Any, Callable, NamedTuple

from endpoint_examples.parser.base import (
    DocumentedEndpoint,
    Endpoint,
    ErrorExample,
    SuccessExample,
    field_count,
)

LOGIN_PATH = "/auth/login"

RESOURCE_ID_RE = re.compile(r"/(\d+)(\?.*)?$")

ID_METHODS = ("GET", "PUT", "PATCH", "DELETE")
WRITE_METHODS = ("POST", "PUT", "PATCH")


def contains(text: str, needle: str) -> bool:
    """Case-insensitive substring test."""
    return needle.lower() in text.lower()


def looks_like_get_by_id(url: str) -> bool:
    """True if the URL ends in a numeric path segment, optionally with a query."""
    return RESOURCE_ID_RE.search(url) is not None


def _mapping(value: Any) -> dict:
    return dict(value) if isinstance(value, dict) else {}


class SuccessRule(NamedTuple):
    name: str
    predicate: Callable[[Endpoint], bool]
    handler: Callable[[Endpoint], SuccessExample]


class ErrorRule(NamedTuple):
    name: str
    predicate: Callable[[Endpoint], bool]
    handler: Callable[[Endpoint], list[ErrorExample]]
    terminal: bool = False


def _error(status: int, message: str) -> ErrorExample:
    return ErrorExample(status=status, body={"message": message})


# -- success rules ------------------------------------------------------------

def _login_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(
        status=200,
        body={"token": "JWT_TOKEN", "user": {"id": 1, "username": "admin", "role": "admin"}},
    )


def _members_summary_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(
        status=200,
        body={
            "totals": [{"sex": "M", "cnt": 100}, {"sex": "F", "cnt": 80}],
            "per_year": [{"year": 2023, "cnt": 120}, {"year": 2024, "cnt": 160}],
        },
    )


def _expired_agreements_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(
        status=200,
        body={"data": [{"union_id": 1, "name_en": "Union A", "next_end_date": "2025-07-01"}]},
    )


def _report_cache_success(ep: Endpoint) -> SuccessExample:
    body = ep.parsed_body
    if not isinstance(body, dict):
        body = {"report_name": "example", "payload": {"key": "value"}}
    return SuccessExample(status=201, body={"id": 1, **body})


def _member_archive_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(status=200, body={"message": "Member archived"})


def _get_success(ep: Endpoint) -> SuccessExample:
    if looks_like_get_by_id(ep.url_raw):
        return SuccessExample(status=200, body={"id": 1})
    return SuccessExample(
        status=200,
        body={"data": [], "meta": {"total": 0, "page": 1, "per_page": 20}},
    )


def _create_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(status=201, body={**_mapping(ep.parsed_body), "id": 1})


def _update_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(status=200, body={"id": 1, **_mapping(ep.parsed_body)})


def _delete_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(status=200, body={"message": "Deleted"})


def _empty_success(ep: Endpoint) -> SuccessExample:
    return SuccessExample(status=200, body={})


SUCCESS_RULES: tuple[SuccessRule, ...] = (
    SuccessRule(
        "login",
        lambda ep: contains(ep.url_raw, LOGIN_PATH) and ep.verb == "POST",
        _login_success,
    ),
    SuccessRule(
        "members-summary",
        lambda ep: contains(ep.url_raw, "/reports/members-summary") and ep.verb == "GET",
        _members_summary_success,
    ),
    SuccessRule(
        "expired-agreements",
        lambda ep: contains(ep.url_raw, "/reports/unions-cba-expired") and ep.verb == "GET",
        _expired_agreements_success,
    ),
    SuccessRule(
        "report-cache",
        lambda ep: contains(ep.url_raw, "/reports/cache") and ep.verb == "POST",
        _report_cache_success,
    ),
    SuccessRule(
        "member-archive",
        lambda ep: (
            ep.verb == "DELETE"
            and contains(ep.url_raw, "/members/")
            and contains(ep.url_raw, "archive=true")
        ),
        _member_archive_success,
    ),
    SuccessRule("get", lambda ep: ep.verb == "GET", _get_success),
    SuccessRule("create", lambda ep: ep.verb == "POST", _create_success),
    SuccessRule("update", lambda ep: ep.verb in ("PUT", "PATCH"), _update_success),
    SuccessRule("delete", lambda ep: ep.verb == "DELETE", _delete_success),
    SuccessRule("fallback", lambda ep: True, _empty_success),
)


# -- error rules --------------------------------------------------------------

ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(
        "unauthorized",
        lambda ep: not contains(ep.url_raw, LOGIN_PATH) and contains(ep.url_raw, "/api/"),
        lambda ep: [_error(401, "Unauthorized")],
    ),
    ErrorRule(
        "login",
        lambda ep: contains(ep.url_raw, LOGIN_PATH) and ep.verb == "POST",
        lambda ep: [
            _error(400, "username and password required"),
            _error(401, "Invalid credentials"),
        ],
        terminal=True,
    ),
    ErrorRule(
        "not-found",
        lambda ep: ep.verb in ID_METHODS and looks_like_get_by_id(ep.url_raw),
        lambda ep: [_error(404, "Not found")],
    ),
    ErrorRule(
        "confirm-required",
        lambda ep: (
            ep.verb == "DELETE"
            and not contains(ep.url_raw, "confirm=true")
            and not contains(ep.url_raw, "archive=true")
        ),
        lambda ep: [_error(400, "To delete set ?confirm=true")],
    ),
    ErrorRule(
        "validation",
        lambda ep: ep.verb in WRITE_METHODS and field_count(ep.parsed_body) > 0,
        lambda ep: [_error(400, "Validation error")],
    ),
    ErrorRule("server-error", lambda ep: True, lambda ep: [_error(500, "Server error")]),
)


def classify_success(endpoint: Endpoint) -> SuccessExample:
    """Return the success example of the first matching success rule."""
    for rule in SUCCESS_RULES:
        if rule.predicate(endpoint):
            return rule.handler(endpoint)
    return _empty_success(endpoint)


def classify_errors(endpoint: Endpoint) -> list[ErrorExample]:
    """Collect error examples from every matching error rule, in table order."""
    errors: list[ErrorExample] = []
    for rule in ERROR_RULES:
        if not rule.predicate(endpoint):
            continue
        errors.extend(rule.handler(endpoint))
        if rule.terminal:
            break
    return errors


def document(endpoints: list[Endpoint]) -> list[DocumentedEndpoint]:
    """Attach success and error examples to every endpoint, keeping order."""
    return [
        DocumentedEndpoint(
            endpoint=ep,
            success=classify_success(ep),
            errors=classify_errors(ep),
        )
        for ep in endpoints
    ]
