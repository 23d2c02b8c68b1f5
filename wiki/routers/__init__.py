"""
Route handlers grouped by domain (articles, auth).

Each module exposes a ``routes`` table; ``build_route_table`` concatenates them
in the order they must be matched.
"""

from wiki.core.routing import RouteTable

from . import articles, auth


def build_route_table() -> RouteTable:
    return RouteTable().extend(articles.routes).extend(auth.routes)
