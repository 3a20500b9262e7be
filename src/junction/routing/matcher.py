"""Path pattern matching.

Patterns are ``/``-separated; a segment starting with ``:`` is a
parameter bound to the request segment in the same position::

    match_path("/users/42", "/users/:id")     -> {"id": "42"}
    match_path("/users/42/", "/users/:id")    -> {"id": "42"}
    match_path("/users/42?x=1", "/users/:id") -> {"id": "42"}
    match_path("/users", "/users/:id")        -> None
"""

PARAM_MARKER = ":"


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments, dropping any query string.

    Trailing and repeated slashes produce no segments, so ``"/"`` and
    ``""`` both split to ``[]``.
    """
    path = path.split("?", 1)[0].rstrip("/")
    return [part for part in path.split("/") if part]


def match_path(path: str, pattern: str) -> dict[str, str] | None:
    """Match a concrete request *path* against a route *pattern*.

    Returns the bound parameters (empty for a static pattern) or ``None``
    when the structure differs. Bound values are the literal segments,
    not URL-decoded.
    """
    path_parts = split_path(path)
    pattern_parts = split_path(pattern)

    if len(path_parts) != len(pattern_parts):
        return None

    params: dict[str, str] = {}
    for pattern_part, path_part in zip(pattern_parts, path_parts, strict=True):
        if pattern_part.startswith(PARAM_MARKER):
            params[pattern_part[len(PARAM_MARKER) :]] = path_part
        elif pattern_part != path_part:
            return None
    return params
