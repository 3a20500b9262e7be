"""Validation results — per-facet outcomes and the combined record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FacetOutcome:
    """The outcome of checking one facet: a value or a list of messages.

    The outcome is falsy when the facet failed, so the engine can write::

        outcome = await check_facet(...)
        if not outcome:
            failures.append(FacetError(facet, outcome.messages))
    """

    value: Any = None
    messages: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.messages

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any) -> FacetOutcome:
        return cls(value=value)

    @classmethod
    def failure(cls, messages: tuple[str, ...] | list[str]) -> FacetOutcome:
        return cls(messages=tuple(messages) or ("Invalid value",))


@dataclass(frozen=True, slots=True)
class ValidatedData:
    """Parsed request facets handed to the route handler.

    Unvalidated facets hold the raw flat values: ``params``, ``query`` and
    ``headers`` are ``dict[str, str]``; ``body`` is ``None`` unless the
    route declared a body validator.
    """

    params: Any
    query: Any
    headers: Any
    body: Any = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "params": self.params,
            "query": self.query,
            "headers": self.headers,
            "body": self.body,
        }
