"""
Exception hierarchy:

    QHTTPError
    ├── UsageError
    │   ├── MalformedUrl
    │   └── MalformedPair
    ├── InvalidHeaderValue
    ├── NetworkError
    └── RenderError
        ├── BodyReadError
        └── MalformedJson
"""

from __future__ import annotations

import typing


class QHTTPError(Exception):
    """Base class for every error qhttp raises."""


class UsageError(QHTTPError):
    """A command-line argument could not be parsed."""


class MalformedUrl(UsageError):
    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        message = f"Invalid URL {url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedPair(UsageError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Failed to parse {token!r}. Expected 'key=value'.")


class InvalidHeaderValue(QHTTPError):
    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for header {name!r}: {value!r}")


class NetworkError(QHTTPError):
    """The request could not be completed (DNS, connect, TLS, timeout...)."""

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"{type(cause).__name__} while requesting {url}: {cause}")


class RenderError(QHTTPError):
    """The response was received but could not be rendered."""

    def __init__(self, message: str, cause: typing.Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(message)


class BodyReadError(RenderError):
    pass


class MalformedJson(RenderError):
    pass
