"""Validation schema — up to four facet validators per route.

A validator is anything junction can call with raw input and get either
a parsed value back or an exception:

- a pydantic-style model class exposing ``model_validate``
- an object with a callable ``parse`` method (e.g. a hand-rolled schema)
- a plain callable ``(raw) -> parsed``

Usage::

    from pydantic import BaseModel

    class UserParams(BaseModel):
        id: int

    def require_name(body):
        if "name" not in body:
            raise ValueError("name is required")
        return body

    schema = ValidationSchema(params=UserParams, body=require_name)
"""

from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any, Protocol, TypeAlias, runtime_checkable

from junction.errors import ConfigurationError

FACETS: tuple[str, ...] = ("params", "query", "headers", "body")


@runtime_checkable
class Parser(Protocol):
    """An object validating input through a ``parse`` method."""

    def parse(self, value: Any) -> Any: ...


Validator: TypeAlias = Parser | Callable[[Any], Any]


def resolve_validator(validator: Any) -> Callable[[Any], Any]:
    """Return the callable junction uses to run *validator*.

    Raises ``ConfigurationError`` if *validator* has none of the supported
    shapes.
    """
    model_validate = getattr(validator, "model_validate", None)
    if callable(model_validate):
        return model_validate
    parse = getattr(validator, "parse", None)
    if callable(parse):
        return parse
    if callable(validator):
        return validator
    msg = (
        f"Invalid validator {validator!r}: expected a callable, an object with "
        "a parse() method, or a model class with model_validate()."
    )
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class ValidationSchema:
    """Per-route facet validators. Omitted facets pass through unvalidated.

    Every supplied validator is checked for a usable shape at construction,
    so a bad schema fails at registration rather than on the first request.
    """

    params: Validator | None = None
    query: Validator | None = None
    headers: Validator | None = None
    body: Validator | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            validator = getattr(self, f.name)
            if validator is not None:
                resolve_validator(validator)

    def validator_for(self, facet: str) -> Validator | None:
        """Return the validator declared for *facet*, if any."""
        if facet not in FACETS:
            msg = f"Unknown facet {facet!r}; expected one of {', '.join(FACETS)}"
            raise ValueError(msg)
        return getattr(self, facet)
