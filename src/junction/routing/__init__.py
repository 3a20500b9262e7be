"""Routing — ordered route table with first-match semantics.

Routes are registered during setup and tried in registration order at
dispatch time. Patterns are not ranked by specificity: the first route
of the request's method whose pattern structurally matches wins.
"""

from junction.routing.matcher import PARAM_MARKER, match_path, split_path
from junction.routing.route import Route, RouteConfig, RouteMatch
from junction.routing.table import RouteTable

__all__ = [
    "PARAM_MARKER",
    "Route",
    "RouteConfig",
    "RouteMatch",
    "RouteTable",
    "match_path",
    "split_path",
]
