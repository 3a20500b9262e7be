"""Immutable query string parameters.

Implements ``Mapping[str, str]`` over a parsed query string.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key; ``get_list`` returns
    all of them. Blank values are kept (``?flag=`` yields ``{"flag": ""}``).
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: str | bytes = "") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_data", parse_qs(query_string, keep_blank_values=True))

    def __setattr__(self, name: str, value: object) -> None:
        msg = "QueryParams are immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def to_dict(self) -> dict[str, str]:
        """Flatten to ``{key: last value}``, the shape validators receive.

        A repeated key keeps its last occurrence, so ``?page=1&page=2``
        flattens to ``{"page": "2"}``. Use ``get_list`` for every value.
        """
        return {key: values[-1] for key, values in self._data.items()}

    @property
    def raw(self) -> str:
        """The undecoded query string, without the leading ``?``."""
        return self._raw
