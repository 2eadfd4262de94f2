from ._client import HTTPClient
from ._config import ClientConfig, header_value
from ._exceptions import (
    BodyReadError,
    InvalidHeaderValue,
    MalformedJson,
    MalformedPair,
    MalformedUrl,
    NetworkError,
    QHTTPError,
    RenderError,
    UsageError,
)
from ._models import Command, Get, KeyValuePair, Post, body_object, parse_pair, parse_url
from ._render import (
    ContentType,
    ResponseRenderer,
    parse_content_type,
    pretty_json,
    quote_header_value,
)
from ._version import __description__, __title__, __version__
from .cli import main

_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(  # pyright: ignore[reportUnsupportedDunderAll]
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
