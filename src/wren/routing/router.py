"""Route table: method -> exact path -> route.

Routes are registered during setup and compiled into an immutable
snapshot when the app starts serving. Lookups never mutate.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from wren.routing.route import Method, Route


class RouteTable:
    """Two-level route table with exact, byte-for-byte path matching.

    A later registration for the same (method, path) silently replaces the
    earlier one. No prefix or pattern matching: ``/docs`` and ``/docs/``
    are different routes.

    Usage::

        table = RouteTable()
        table.add(Route("/hi", Method.GET, hello))
        table.compile()
        route = table.lookup("GET", "/hi")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: Mapping[Method, Mapping[str, Route]] = {method: {} for method in Method}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Insert or overwrite a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes[route.method][route.path] = route  # type: ignore[index]

    def compile(self) -> None:
        """Freeze the table into a read-only snapshot shared by all requests."""
        if self._compiled:
            return
        self._routes = MappingProxyType(
            {method: MappingProxyType(dict(paths)) for method, paths in self._routes.items()}
        )
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    def lookup(self, method: str, path: str) -> Route | None:
        """Return the route for *method* and *path*, or ``None`` on a miss.

        A miss is not an error: the caller moves on to the static fallback.
        Unknown methods (``HEAD``, ``TRACE``, ...) always miss.
        """
        try:
            key = Method(method)
        except ValueError:
            return None
        return self._routes[key].get(path)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method in enumeration order."""
        return list(self)

    def __iter__(self) -> Iterator[Route]:
        for paths in self._routes.values():
            yield from paths.values()

    def __len__(self) -> int:
        return sum(len(paths) for paths in self._routes.values())
