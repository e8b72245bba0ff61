"""Command line interface.

    polysecret solve shares.json [--verify] [--json]
    polysecret decode 2122212201 --base 3 [--to 16]

Exit codes: 0 success, 1 malformed input, 2 numeric inconsistency.
"""

import json
import logging
import sys
from contextlib import contextmanager

import click

from polysecret import base as base_codec
from polysecret import loader
from polysecret.errors import NumericError, ShareError
from polysecret.solver import solve as solve_shares

EXIT_INPUT = 1
EXIT_NUMERIC = 2


def exit_code_for(exc: ShareError) -> int:
    if isinstance(exc, NumericError):
        return EXIT_NUMERIC
    return EXIT_INPUT


def _fail(exc: ShareError) -> None:
    where = []
    for name in ('key', 'index', 'field', 'position'):
        value = exc.details.get(name)
        if value is not None:
            where.append(f"{name}={value}")
    suffix = f" [{', '.join(where)}]" if where else ""
    click.echo(f"error: {exc.kind}: {exc}{suffix}", err=True)
    sys.exit(exit_code_for(exc))


@contextmanager
def _unlimited_int_digits():
    """Lift sys.set_int_max_str_digits while printing exact results."""
    get_limit = getattr(sys, "get_int_max_str_digits", None)
    if get_limit is None:
        yield
        return
    limit = get_limit()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(limit)


def _read_document(path: str):
    if path == "-":
        return loader.load_bytes(click.get_binary_stream("stdin").read())
    return loader.load_path(path)


@click.group()
@click.option("--log-level", default="WARNING", show_default=True,
              envvar="POLYSECRET_LOG_LEVEL",
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"],
                                case_sensitive=False),
              help="Logging verbosity on stderr")
def main(log_level: str) -> None:
    """Reconstruct Shamir-style secrets from base-encoded shares."""
    logging.basicConfig(level=log_level.upper(),
                        format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("document", type=click.Path(allow_dash=True), default="-")
@click.option("--verify", is_flag=True,
              help="Require every window of k consecutive shares to agree")
@click.option("--json", "as_json", is_flag=True, help="Emit a JSON object")
def solve(document, verify: bool, as_json: bool) -> None:
    """Print the secret encoded by a JSON share DOCUMENT ('-' for stdin)."""
    try:
        result = solve_shares(_read_document(document), verify=verify)
    except ShareError as exc:
        _fail(exc)

    with _unlimited_int_digits():
        if as_json:
            click.echo(json.dumps({
                "secret": str(result.secret),
                "n": result.threshold.n,
                "k": result.threshold.k,
                "used": [p.x for p in result.used],
                "verified": result.verified,
            }))
        else:
            click.echo(str(result.secret))


@main.command()
@click.argument("digits")
@click.option("--base", "radix", type=int, required=True,
              help="Base DIGITS are written in (2..36)")
@click.option("--to", "target", type=int, default=10, show_default=True,
              help="Base to print the value in")
def decode(digits: str, radix: int, target: int) -> None:
    """Decode DIGITS written in --base and print the value."""
    try:
        value = base_codec.decode(digits, radix)
        with _unlimited_int_digits():
            click.echo(str(value) if target == 10
                       else base_codec.encode(value, target))
    except ShareError as exc:
        _fail(exc)


if __name__ == "__main__":
    main()
