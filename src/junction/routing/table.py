"""Ordered route table.

Routes are kept in registration order and never reordered. Lookup walks
that order and returns the first route of the right method whose
pattern matches, so earlier registrations shadow later ones.
"""

from collections.abc import Iterator

from junction.routing.matcher import match_path
from junction.routing.route import Route, RouteMatch


class RouteTable:
    """Registration-ordered routes with first-match lookup.

    Usage::

        table = RouteTable()
        table.add(Route("GET", "/users/:id", show_user))
        table.compile()
        match = table.match("GET", "/users/42")  # RouteMatch or None
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] | tuple[Route, ...] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        assert isinstance(self._routes, list)
        self._routes.append(route)

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._routes = tuple(self._routes)
        self._compiled = True

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes in registration order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, else ``None``."""
        method = method.upper()
        for route in self._routes:
            if route.method != method:
                continue
            params = match_path(path, route.pattern)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return None

