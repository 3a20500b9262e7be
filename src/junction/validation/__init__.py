"""Request validation — four facets, aggregated failures.

Usage::

    from junction.validation import ValidationSchema

    def long_id(params):
        if len(params["id"]) < 3:
            raise ValueError("id must be at least 3 characters")
        return params

    await dispatcher.get(
        "/users/:id",
        RouteConfig(validation=ValidationSchema(params=long_id)),
        show_user,
    )

    # GET /users/12 ->
    # 400 {"error": "Validation failed",
    #      "details": [{"type": "params", "messages": ["id must be ..."]}]}
"""

from junction.errors import FacetError, ValidationFailed
from junction.validation.engine import call_validator, extract_messages, validate_request
from junction.validation.result import FacetOutcome, ValidatedData
from junction.validation.schema import (
    FACETS,
    Parser,
    ValidationSchema,
    Validator,
    resolve_validator,
)

__all__ = [
    "FACETS",
    "FacetError",
    "FacetOutcome",
    "Parser",
    "ValidatedData",
    "ValidationFailed",
    "ValidationSchema",
    "Validator",
    "call_validator",
    "extract_messages",
    "resolve_validator",
    "validate_request",
]
