from __future__ import annotations

import dataclasses
import re

from ._exceptions import InvalidHeaderValue
from ._version import __version__

POWERED_BY_HEADER = "X-Powered-By"
POWERED_BY = "Python"
USER_AGENT = f"qhttp/{__version__}"

# Visible ASCII plus space and horizontal tab; httpx encodes header values as ASCII.
_FIELD_VALUE = re.compile(r"[\t\x20-\x7e]*")
_FIELD_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def header_value(name: str, value: str) -> str:
    """Convert ``value`` into something that can be sent as a header value.

    Raises :class:`InvalidHeaderValue` for names that are not tokens and for
    values containing control characters (CR/LF included) or non-ASCII
    characters.
    """
    if not _FIELD_NAME.fullmatch(name) or not _FIELD_VALUE.fullmatch(value):
        raise InvalidHeaderValue(name, value)
    return value.strip(" \t")


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    """Settings handed to :class:`~qhttp.HTTPClient` at startup."""

    powered_by: str = POWERED_BY
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        header_value(POWERED_BY_HEADER, self.powered_by)
        header_value("User-Agent", self.user_agent)

    @property
    def headers(self) -> dict[str, str]:
        return {
            POWERED_BY_HEADER: header_value(POWERED_BY_HEADER, self.powered_by),
            "User-Agent": header_value("User-Agent", self.user_agent),
        }
