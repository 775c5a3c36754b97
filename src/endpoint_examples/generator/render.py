"""Renderers — turn documented endpoints into Markdown or a JSON list."""

import json
from typing import Any, Callable

from endpoint_examples.parser.base import DocumentedEndpoint

MARKDOWN_HEADER = (
    "## API Endpoint Examples\n\n"
    "Generated from Postman collection. Success/error bodies are heuristic.\n\n"
)


def _dumps(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _code_block(text: str, lang: str = "json") -> str:
    return f"```{lang}\n{text}\n```\n"


def _render_endpoint(doc: DocumentedEndpoint) -> str:
    ep = doc.endpoint
    title = f"### [{ep.method}] {ep.url_raw}"
    if ep.name:
        title += f" - {ep.name}"
    parts = [title + "\n"]

    if ep.group:
        parts.append(f"Group: {ep.group}\n\n")

    if ep.headers:
        parts.append("Headers:\n" + _code_block(_dumps(ep.headers)) + "\n")

    if ep.body_raw is not None:
        body = ep.parsed_body
        if body is None:
            # Unparseable bodies are shown exactly as authored
            block = _code_block(ep.body_raw, lang="text")
        else:
            block = _code_block(_dumps(body))
        parts.append("Request Body:\n" + block + "\n")

    parts.append(f"Success ({doc.success.status}):\n" + _code_block(_dumps(doc.success.body)) + "\n")

    if doc.errors:
        parts.append("Errors:\n")
        for err in doc.errors:
            parts.append(f"- {err.status}:\n" + _code_block(_dumps(err.body)))
        parts.append("\n")

    return "".join(parts)


def to_markdown(documented: list[DocumentedEndpoint]) -> str:
    """Render the Markdown examples document."""
    return MARKDOWN_HEADER + "".join(_render_endpoint(doc) for doc in documented)


def to_records(documented: list[DocumentedEndpoint]) -> list[dict]:
    """One JSON-ready record per endpoint, in collection order."""
    return [
        {
            "name": doc.endpoint.name,
            "group": doc.endpoint.group,
            "method": doc.endpoint.method,
            "url": doc.endpoint.url_raw,
            "headers": doc.endpoint.headers,
            "requestBody": doc.endpoint.parsed_body,
            "success": doc.success.model_dump(),
            "errors": [err.model_dump() for err in doc.errors],
        }
        for doc in documented
    ]


def to_json(documented: list[DocumentedEndpoint]) -> str:
    """Render the machine-readable list as a pretty-printed JSON array."""
    return _dumps(to_records(documented))


RENDERERS: dict[str, Callable[[list[DocumentedEndpoint]], str]] = {
    "md": to_markdown,
    "json": to_json,
}
