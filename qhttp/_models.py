from __future__ import annotations

import dataclasses
import typing

import httpx

from ._exceptions import MalformedPair, MalformedUrl


@dataclasses.dataclass(frozen=True)
class KeyValuePair:
    key: str
    value: str


@dataclasses.dataclass(frozen=True)
class Get:
    url: str


@dataclasses.dataclass(frozen=True)
class Post:
    url: str
    body: tuple[KeyValuePair, ...] = ()


Command = typing.Union[Get, Post]


def parse_url(value: str) -> str:
    """Return ``value`` unchanged if it is an absolute URL.

    Raises :class:`MalformedUrl` otherwise. Only syntax is checked, nothing
    is resolved or fetched.
    """
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as exc:
        raise MalformedUrl(value, str(exc)) from exc

    if not url.scheme:
        raise MalformedUrl(value, "missing scheme")
    if not url.host:
        raise MalformedUrl(value, "missing host")
    return value


def parse_pair(token: str) -> KeyValuePair:
    """Split ``key=value`` on the first ``=``; the value keeps any later ``=``."""
    key, sep, value = token.partition("=")
    if not sep:
        raise MalformedPair(token)
    return KeyValuePair(key=key, value=value)


def body_object(pairs: typing.Iterable[KeyValuePair]) -> dict[str, str]:
    # Later duplicates overwrite the value but keep the first key position.
    obj: dict[str, str] = {}
    for pair in pairs:
        obj[pair.key] = pair.value
    return obj
