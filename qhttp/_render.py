from __future__ import annotations

import dataclasses
import json
import logging
import re
import typing

import httpx
from rich.console import Console
from rich.text import Text

from ._exceptions import BodyReadError, MalformedJson

logger = logging.getLogger("qhttp.render")

STATUS_STYLE = "bold blue"
HEADER_NAME_STYLE = "green"
JSON_STYLE = "cyan"

JSON_INDENT = 2

_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


@dataclasses.dataclass(frozen=True)
class ContentType:
    type: str
    subtype: str
    params: tuple[tuple[str, str], ...] = ()

    @property
    def essence(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def is_json(self) -> bool:
        return self.essence == "application/json"


def parse_content_type(value: str | None) -> ContentType | None:
    """Parse a ``Content-Type`` header value, or return ``None`` if it is not one."""
    if not value:
        return None

    essence, *raw_params = value.split(";")
    type_, sep, subtype = essence.strip().partition("/")
    if not sep or not _TOKEN.fullmatch(type_) or not _TOKEN.fullmatch(subtype):
        return None

    params: list[tuple[str, str]] = []
    for raw in raw_params:
        raw = raw.strip()
        if not raw:
            continue
        name, sep, param_value = raw.partition("=")
        name = name.strip()
        if not sep or not _TOKEN.fullmatch(name):
            return None
        param_value = param_value.strip()
        if len(param_value) >= 2 and param_value[0] == param_value[-1] == '"':
            param_value = param_value[1:-1]
        params.append((name.lower(), param_value))

    return ContentType(type=type_.lower(), subtype=subtype.lower(), params=tuple(params))


def quote_header_value(value: str) -> str:
    """Return ``value`` double-quoted, tabs as ``\\t`` and other non-printable bytes as ``\\xNN``."""
    out = ['"']
    for char in value:
        if char in '"\\':
            out.append("\\" + char)
        elif char == "\t":
            out.append("\\t")
        elif " " <= char <= "~":
            out.append(char)
        else:
            out.extend(f"\\x{byte:x}" for byte in char.encode("utf-8"))
    out.append('"')
    return "".join(out)


def _reject_constant(name: str) -> typing.NoReturn:
    raise ValueError(f"{name} is not a JSON value")


def pretty_json(text: str, indent: int = JSON_INDENT) -> str:
    """Re-indent JSON ``text`` without touching its tokens.

    The text is validated with :func:`json.loads` first, then whitespace is
    rewritten around the structural characters only. Duplicate keys, number
    literals and string escapes come out exactly as they went in.
    """
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedJson(f"Response body is not valid JSON: {exc}", exc) from exc

    closing = {"{": "}", "[": "]"}
    out: list[str] = []
    depth = 0
    in_string = False
    escaped = False
    i, n = 0, len(text)
    while i < n:
        char = text[i]
        i += 1
        if in_string:
            out.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
            out.append(char)
        elif char in closing:
            j = i
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j < n and text[j] == closing[char]:
                out.append(char + closing[char])
                i = j + 1
            else:
                depth += 1
                out.append(char + "\n" + " " * (indent * depth))
        elif char in "}]":
            depth -= 1
            out.append("\n" + " " * (indent * depth) + char)
        elif char == ",":
            out.append(",\n" + " " * (indent * depth))
        elif char == ":":
            out.append(": ")
        elif char not in " \t\r\n":
            out.append(char)
    return "".join(out)


class ResponseRenderer:
    """Write a response to the console as status line, headers and body."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or make_console()

    async def render(self, response: httpx.Response) -> None:
        self.print_status(response)
        self.print_headers(response)
        content_type = parse_content_type(response.headers.get("content-type"))
        body = await self.read_body(response)
        self.print_body(content_type, body)

    def print_status(self, response: httpx.Response) -> None:
        status = f"{response.http_version} {response.status_code} {response.reason_phrase}"
        self.console.print(Text(status.rstrip(), style=STATUS_STYLE), soft_wrap=True)
        self.console.print()

    def print_headers(self, response: httpx.Response) -> None:
        for name, value in response.headers.multi_items():
            line = Text()
            line.append(name, style=HEADER_NAME_STYLE)
            line.append(": ")
            line.append(quote_header_value(value))
            self.console.print(line, soft_wrap=True)
        self.console.print()

    async def read_body(self, response: httpx.Response) -> str:
        try:
            await response.aread()
            return response.text
        except (httpx.RequestError, httpx.StreamError) as exc:
            raise BodyReadError(f"Failed to read response body: {exc}", exc) from exc
        except (UnicodeDecodeError, LookupError) as exc:
            raise BodyReadError(f"Failed to decode response body: {exc}", exc) from exc

    def print_body(self, content_type: ContentType | None, body: str) -> None:
        if content_type is not None and content_type.is_json:
            logger.debug("rendering %d characters as JSON", len(body))
            self.console.print(Text(pretty_json(body), style=JSON_STYLE), soft_wrap=True)
        else:
            # Bypass rich so tabs and control characters reach the terminal as sent.
            file = self.console.file
            file.write(body + "\n")
            file.flush()


def make_console(*, color: bool = True, stderr: bool = False) -> Console:
    return Console(
        stderr=stderr,
        color_system="auto" if color else None,
        highlight=False,
        markup=False,
        emoji=False,
    )
