"""URL-encoded parameter parsing for query strings and form bodies."""

from urllib.parse import parse_qsl

# Flat request parameters: strings from query/form, any JSON value from JSON bodies
type Params = dict[str, object]


def parse_params(raw: str) -> dict[str, str]:
    """Decode a URL-encoded string into a flat mapping.

    Repeated keys keep their last value; blank values are kept as ``""``.
    A leading ``?`` is ignored so raw search strings can be passed as-is.

    Example::

        parse_params("a=1&b=two+words&a=3")  # {"a": "3", "b": "two words"}
    """
    if raw.startswith("?"):
        raw = raw[1:]
    return dict(parse_qsl(raw, keep_blank_values=True))
