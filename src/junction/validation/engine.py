"""Validation engine — check every request facet, then fail once.

Facets are checked in a fixed order (params, query, headers, body). A
failing facet never stops the others: every failure is collected and
raised together as a single ``ValidationFailed``.
"""

import json
from collections.abc import Mapping
from typing import Any

from junction._internal.invoke import invoke
from junction.errors import FacetError, ValidationFailed
from junction.http.request import Request
from junction.validation.result import FacetOutcome, ValidatedData
from junction.validation.schema import ValidationSchema, Validator, resolve_validator

INVALID_JSON_MESSAGE = "Invalid JSON in request body"
INVALID_TEXT_MESSAGE = "Request body is not valid UTF-8 text"
FALLBACK_MESSAGE = "Invalid value"


def extract_messages(exc: BaseException) -> list[str]:
    """Pull human-readable messages out of a validator failure.

    Best-effort, in order:

    1. ``exc.errors()`` returning dicts with ``msg`` and optional ``loc``
       (pydantic's ``ValidationError`` shape) → ``"loc.path: msg"``
    2. ``exc.messages`` as a list of strings
    3. ``str(exc)``
    4. a generic fallback
    """
    errors = getattr(exc, "errors", None)
    if callable(errors):
        try:
            items = errors()
        except Exception:  # noqa: BLE001 -- errors() is third-party code
            items = None
        messages = [_format_error_item(item) for item in items or () if isinstance(item, Mapping)]
        messages = [m for m in messages if m]
        if messages:
            return messages

    explicit = getattr(exc, "messages", None)
    if isinstance(explicit, list | tuple) and explicit:
        return [str(m) for m in explicit]

    text = str(exc)
    return [text] if text else [FALLBACK_MESSAGE]


def _format_error_item(item: Mapping[str, Any]) -> str:
    msg = item.get("msg") or item.get("message") or ""
    loc = item.get("loc") or ()
    if isinstance(loc, list | tuple) and loc:
        return f"{'.'.join(str(part) for part in loc)}: {msg}"
    return str(msg)


async def call_validator(validator: Validator, value: Any) -> FacetOutcome:
    """Run one validator, converting any exception into a failed outcome."""
    func = resolve_validator(validator)
    try:
        parsed = await invoke(func, value)
    except Exception as exc:  # noqa: BLE001 -- any raise is a facet failure
        return FacetOutcome.failure(extract_messages(exc))
    return FacetOutcome.success(parsed)


async def _decode_body(request: Request) -> FacetOutcome:
    """Decode the body per its content type: JSON when it says so, else text."""
    raw = await request.body()
    content_type = (request.content_type or "").lower()
    if "json" in content_type:
        try:
            return FacetOutcome.success(json.loads(raw))
        except ValueError:
            return FacetOutcome.failure([INVALID_JSON_MESSAGE])
    try:
        return FacetOutcome.success(raw.decode("utf-8"))
    except UnicodeDecodeError:
        return FacetOutcome.failure([INVALID_TEXT_MESSAGE])


async def validate_request(
    request: Request,
    path_params: Mapping[str, str],
    schema: ValidationSchema | None,
) -> ValidatedData:
    """Validate *request* against *schema* and return the combined record.

    Without a schema every facet passes through raw and the body stays
    unread. Raises ``ValidationFailed`` listing every failing facet.
    """
    raw: dict[str, Any] = {
        "params": dict(path_params),
        "query": request.query.to_dict(),
        "headers": request.headers.to_dict(),
    }
    values: dict[str, Any] = {**raw, "body": None}
    failures: list[FacetError] = []

    if schema is None:
        return ValidatedData(**values)

    for facet, value in raw.items():
        validator = schema.validator_for(facet)
        if validator is None:
            continue
        outcome = await call_validator(validator, value)
        if outcome:
            values[facet] = outcome.value
        else:
            failures.append(FacetError(facet, outcome.messages))

    if schema.body is not None:
        outcome = await _decode_body(request)
        if outcome:
            outcome = await call_validator(schema.body, outcome.value)
        if outcome:
            values["body"] = outcome.value
        else:
            failures.append(FacetError("body", outcome.messages))

    if failures:
        raise ValidationFailed(failures)
    return ValidatedData(**values)
