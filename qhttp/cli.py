from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys
import typing

import click
from rich.logging import RichHandler
from rich.text import Text

from ._client import HTTPClient
from ._config import ClientConfig
from ._exceptions import QHTTPError, UsageError
from ._models import Command, Get, KeyValuePair, Post, parse_pair, parse_url
from ._render import ResponseRenderer, make_console
from ._version import __version__

# ---------------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------------


class URLType(click.ParamType):
    name = "url"

    def convert(
        self,
        value: typing.Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> str:
        try:
            return parse_url(value)
        except UsageError as exc:
            self.fail(str(exc), param, ctx)


class PairType(click.ParamType):
    name = "key=value"

    def convert(
        self,
        value: typing.Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> KeyValuePair:
        if isinstance(value, KeyValuePair):
            return value
        try:
            return parse_pair(value)
        except UsageError as exc:
            self.fail(str(exc), param, ctx)


URL = URLType()
PAIR = PairType()


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


@dataclasses.dataclass
class Options:
    color: bool = True


def configure_logging(verbose: bool, color: bool = True) -> None:
    if not verbose:
        return

    handler = RichHandler(console=make_console(color=color, stderr=True), show_path=False)
    for name, level in (("qhttp", logging.DEBUG), ("httpx", logging.INFO)):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if not any(isinstance(h, RichHandler) for h in logger.handlers):
            logger.addHandler(handler)


async def execute(command: Command, config: ClientConfig, renderer: ResponseRenderer) -> None:
    async with HTTPClient(config) as client:
        if isinstance(command, Post):
            response = await client.post(command.url, command.body)
        else:
            response = await client.get(command.url)
        await renderer.render(response)


def run(options: Options, command: Command) -> None:
    try:
        renderer = ResponseRenderer(make_console(color=options.color))
        asyncio.run(execute(command, ClientConfig(), renderer))
    except QHTTPError as exc:
        console = make_console(color=options.color, stderr=True)
        message = Text()
        message.append(type(exc).__name__, style="bold red")
        message.append(f": {exc}")
        console.print(message, soft_wrap=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


@click.group(help="A small HTTP client. Sends one GET or POST and prints the response.")
@click.version_option(__version__, prog_name="qhttp")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log requests to stderr.")
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, no_color: bool) -> None:
    configure_logging(verbose, color=not no_color)
    ctx.obj = Options(color=not no_color)


@main.command(help="Send a GET request to URL.")
@click.argument("url", type=URL)
@click.pass_obj
def get(options: Options, url: str) -> None:
    run(options, Get(url))


@main.command(help="Send a POST request to URL with a JSON object built from key=value pairs.")
@click.argument("url", type=URL)
@click.argument("body", nargs=-1, type=PAIR)
@click.pass_obj
def post(options: Options, url: str, body: tuple[KeyValuePair, ...]) -> None:
    run(options, Post(url, tuple(body)))
