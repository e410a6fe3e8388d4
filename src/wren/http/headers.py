"""Read-only, case-insensitive request headers."""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive header mapping built once from raw ASGI byte pairs.

    Names are stored lowercased. Repeated headers keep every value;
    ``headers[name]`` returns the first one.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, list[str]] = {}
        for name, value in raw:
            key = name.decode("latin-1").lower()
            values.setdefault(key, []).append(value.decode("latin-1"))
        self._values = values

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({dict(self)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value sent for *key*."""
        return list(self._values.get(key.lower(), ()))


def parse_content_type(raw: str | None) -> tuple[str, dict[str, str]]:
    """Split a Content-Type value into its base token and parameters.

    The base token keeps its case; parameter names are lowercased and
    quoted values unquoted::

        parse_content_type('application/json; Charset="UTF-8"')
        # ("application/json", {"charset": "UTF-8"})
    """
    if not raw:
        return "", {}
    base, *parts = (part.strip() for part in raw.split(";"))
    params: dict[str, str] = {}
    for part in parts:
        name, sep, value = part.partition("=")
        if not sep:
            continue
        params[name.strip().lower()] = value.strip().strip('"')
    return base, params
