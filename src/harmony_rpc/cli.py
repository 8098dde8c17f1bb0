"""
harmony-rpc CLI

Command-line access to the Harmony node API through a validating session.

Commands:
  info      - Show the resolved network, shard, endpoint and page sizes
  methods   - List supported methods
  validate  - Check arguments for a method without sending anything
  call      - Validate (unless skipped) and send a request, print the raw body

Method arguments are given positionally or as name=value pairs.
"true"/"false" become booleans and "null" leaves a parameter out.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional

import click
from loguru import logger

from .config import load_config
from .errors import ConfigError, RpcTransportError, UnknownMethodError
from .rpc.transport import EmptyResponse, TransportError
from .session import Session

VERSION = "1.0.0"

_LITERALS = {"true": True, "false": False, "null": None}


def parse_arguments(tokens: tuple[str, ...]) -> tuple[list[Any], dict[str, Any]]:
    """Split CLI tokens into positional and keyword method arguments."""
    args: list[Any] = []
    kwargs: dict[str, Any] = {}
    for token in tokens:
        name, sep, raw = token.partition("=")
        if sep and name.isidentifier():
            kwargs[name] = _LITERALS.get(raw.lower(), raw)
        else:
            args.append(_LITERALS.get(token.lower(), token))
    return args, kwargs


def _session(ctx: click.Context) -> Session:
    obj = ctx.ensure_object(dict)
    if "session" not in obj:
        try:
            config = load_config(
                obj.get("env_file"),
                network=obj.get("network"),
                shard=obj.get("shard"),
            )
            obj["session"] = Session.from_config(config, transport=obj.get("transport"))
        except ConfigError as exc:
            click.secho(f"ERROR: {exc}", fg="red", err=True)
            for line in exc.errors:
                click.echo(f"  - {line}", err=True)
            sys.exit(exc.exit_code)
    return obj["session"]


def _print_errors(session: Session) -> None:
    click.secho("Validation failed:", fg="red")
    for message in session.get_errors():
        click.echo(f"  - {message}")


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="harmony-rpc")
@click.option("--network", "-n", envvar="HARMONY_NETWORK", help="Network name (e.g. mainnet, testnet)")
@click.option("--shard", "-s", type=int, envvar="HARMONY_SHARD", help="Shard index")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file (default: ~/.harmony-rpc/.env)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    network: Optional[str],
    shard: Optional[int],
    env_file: Optional[Path],
    verbose: bool,
) -> None:
    """harmony-rpc - validated Harmony node JSON-RPC client."""
    obj = ctx.ensure_object(dict)
    obj.setdefault("network", network)
    obj.setdefault("shard", shard)
    obj.setdefault("env_file", env_file)
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("harmony_rpc")


# ============ Commands ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show session settings."""
    session = _session(ctx)
    click.echo(f"harmony-rpc v{VERSION}")
    click.echo(f"  Network:           {session.network}")
    click.echo(f"  Shard:             {session.shard}")
    click.echo(f"  Endpoint:          {session.endpoint}")
    click.echo(f"  Default page size: {session.default_page_size}")
    click.echo(f"  Max page size:     {session.max_page_size}")


@cli.command("methods")
@click.option("--section", help="Only list one API section (e.g. account)")
@click.pass_context
def list_methods(ctx: click.Context, section: Optional[str]) -> None:
    """List supported methods."""
    session = _session(ctx)
    descriptors = session.methods()
    if section:
        descriptors = [d for d in descriptors if d.section == section]
        if not descriptors:
            known = ", ".join(session.registry.sections())
            click.secho(f"Unknown section {section!r} (sections: {known})", fg="red")
            sys.exit(1)
    for descriptor in descriptors:
        click.echo(f"{descriptor.rpc_method:<48} {descriptor.signature()}")


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("method")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def validate(ctx: click.Context, method: str, arguments: tuple[str, ...]) -> None:
    """Check METHOD ARGUMENTS without sending a request."""
    session = _session(ctx)
    args, kwargs = parse_arguments(arguments)
    try:
        ok = session.validate(method, *args, **kwargs)
    except (UnknownMethodError, TypeError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(UnknownMethodError.exit_code)
    if not ok:
        _print_errors(session)
        sys.exit(1)
    click.secho("Arguments are valid.", fg="green")


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("method")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.option("--skip-validation", is_flag=True, help="Send arguments without checking them")
@click.pass_context
def call(ctx: click.Context, method: str, arguments: tuple[str, ...], skip_validation: bool) -> None:
    """Send METHOD with ARGUMENTS and print the raw response."""
    session = _session(ctx)
    args, kwargs = parse_arguments(arguments)
    try:
        if skip_validation:
            result = session.call(method, *args, **kwargs)
        else:
            prepared = session.prepare(method, *args, **kwargs)
            if prepared is None:
                _print_errors(session)
                sys.exit(1)
            result = session.dispatch(prepared)
    except (UnknownMethodError, TypeError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(UnknownMethodError.exit_code)

    if isinstance(result, TransportError):
        click.secho(f"ERROR: request to {result.url} failed: {result.message}", fg="red", err=True)
        sys.exit(RpcTransportError.exit_code)
    if isinstance(result, EmptyResponse):
        click.secho("(empty response)", fg="yellow")
        return
    click.echo(result.body)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
