"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from cdnpub.config import Settings, load_config
from cdnpub.core.article import load_article, transform_article
from cdnpub.core.errors import BuildError
from cdnpub.core.pipeline import run_build
from cdnpub.core.utils.fs import dump_json


LOG_FORMAT = "[cdnpub] %(levelname)s %(message)s"


def _fail(msg: str) -> None:
    """Print a single-line error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(" ".join(str(e).split()))


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_cmd(
    input_dir: Annotated[Optional[str], typer.Option("--input-dir", "--input", help="Curated input root")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", "--out", help="Output root")] = None,
    version: Annotated[Optional[str], typer.Option("--version", help="Version label; leading 'v' is stripped")] = None,
    checksum: Annotated[Optional[bool], typer.Option("--checksum/--no-checksum", help="Attach sha256 checksums")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")] = None,
    ):
    """Build versioned textbook, exercises and exams artifacts with manifests and latest locators."""
    settings = _settings(overrides={
        "input_dir": input_dir, "output_dir": out, "version": version,
        "checksum": checksum, "log_level": log_level,
    })
    _configure_logging(settings.log_level)

    try:
        results = run_build(settings)
    except BuildError as e:
        _fail(str(e))

    for r in results:
        typer.echo(f"  {r.name}: {r.chapters} chapter(s), {r.sections} section(s) -> {r.version_dir}")
    typer.echo(f"Built version {settings.version} to {settings.output_dir}/")


def render_cmd(
    path: Annotated[Path, typer.Argument(help="Curated article JSON file")],
    chapter: Annotated[str, typer.Option("--chapter", help="Chapter id")],
    section: Annotated[Optional[str], typer.Option("--section", help="Section id (default: file name)")] = None,
    checksum: Annotated[bool, typer.Option("--checksum", help="Attach sha256 checksum")] = False,
    ):
    """Transform one curated article and print the published JSON."""
    section_id = section or path.stem
    try:
        article = transform_article(load_article(path, f"article {section_id}"), chapter, section_id, checksum)
    except BuildError as e:
        _fail(str(e))
    typer.echo(dump_json(article.to_json_data()))
