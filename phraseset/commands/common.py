"""Options and helpers shared by several subcommands."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import click

from phraseset.charset import Charset, get_charset_by_name
from phraseset.config import Config


def charset_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--charset`` (file) and ``--charset-name`` (predefined) options."""

    func = click.option(
        "charset_name",
        "--charset-name",
        type=str,
        default=None,
        help="Predefined charset name (English-27, Croatian-28)",
    )(func)
    func = click.option(
        "charset_path",
        "--charset",
        type=click.Path(path_type=Path),
        default=None,
        help="Charset file: a single UTF-8 line listing every accepted symbol",
    )(func)
    return func


def resolve_charset(charset_path: Path | None, charset_name: str | None) -> Charset:
    if charset_path is not None and charset_name is not None:
        raise click.ClickException("Use either --charset or --charset-name, not both")
    if charset_path is not None:
        return Charset.from_file(charset_path)
    if charset_name is not None:
        try:
            return get_charset_by_name(charset_name)
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
    raise click.ClickException("A charset is required: pass --charset or --charset-name")


def parse_word_counts(value: str) -> tuple[int, ...]:
    """Parse a comma-separated list of positive word counts, e.g. "2,3"."""

    try:
        counts = tuple(int(v.strip()) for v in value.split(",") if v.strip())
    except ValueError as exc:
        raise click.ClickException(f"--words must be comma-separated integers, got {value!r}") from exc
    if not counts or any(c < 1 for c in counts):
        raise click.ClickException("--words must list at least one positive integer")
    return counts


DEFAULT_WORDS = ",".join(str(c) for c in Config.DEFAULT_WORD_COUNTS)
