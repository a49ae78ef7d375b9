"""Typer-based command line interface.

``randfill generate`` imports a type given as ``module:QualifiedName`` and
prints the ``repr`` of randomly populated instances of it.  ``randfill config``
prints the effective randomization parameters as YAML.

Exit codes
----------
0 success
3 target import error (missing module or attribute)
4 configuration error
5 generation error (``RandomizationError`` while populating)
"""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import RandomizationParameters, load_parameters
from .engine import RandomizationEngine
from .utils.errors import RandomizationError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="randfill",
    help="Generate randomly populated instances of Python types. "
    "Use 'randfill generate module:Type' to print instances.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load(config_path: Path | None) -> RandomizationParameters:
    try:
        return load_parameters(config_path)
    except (ValidationError, OSError, yaml.YAMLError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])


def _apply_overrides(
    params: RandomizationParameters, *, seed: int | None, scan: bool | None
) -> RandomizationParameters:
    """Return a validated copy of ``params`` with CLI overrides applied."""

    updates: dict[str, Any] = {}
    if seed is not None:
        updates["seed"] = seed
    if scan is not None:
        updates["scan_for_concrete_types"] = scan
    if not updates:
        return params
    return RandomizationParameters.model_validate({**params.model_dump(), **updates})


def resolve_target(target: str) -> Any:
    """Import ``module:QualifiedName`` and return the named object.

    Raises
    ------
    ImportError
        If the module cannot be imported.
    AttributeError
        If the qualified name does not exist in the module.
    ValueError
        If ``target`` is not of the form ``module:name``.
    """

    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"target must look like 'module:Name', got {target!r}")
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main() -> None:
    """Entry point for the randfill command group."""
    pass


@app.command()
def generate(  # noqa: PLR0913
    target: str = typer.Argument(..., help="Type to generate, as module:QualifiedName"),
    count: int = typer.Option(1, "--count", "-n", min=0, help="Number of instances"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible output"),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    exclude: Optional[list[str]] = typer.Option(  # noqa: B008
        None, "--exclude", "-x", help="Dotted field path to leave unpopulated (repeatable)"
    ),
    scan: Optional[bool] = typer.Option(  # noqa: B008
        None,
        "--scan/--no-scan",
        help="Resolve abstract types to concrete subtypes",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Log engine decisions to stderr"
    ),
) -> None:
    """Print ``count`` random instances of ``target``."""

    configure_logging(verbose)
    params = _apply_overrides(_load(config_path), seed=seed, scan=scan)

    try:
        type_ = resolve_target(target)
    except (ImportError, AttributeError, ValueError) as exc:
        _safe_exit(3, f"Cannot resolve {target}: {exc}")

    engine = RandomizationEngine(params)
    try:
        for instance in engine.objects(type_, count, *(exclude or [])):
            typer.echo(repr(instance))
    except RandomizationError as exc:
        _safe_exit(5, f"Generation failed: {exc}")


@app.command("config")
def show_config(
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
) -> None:
    """Print the effective randomization parameters as YAML."""

    params = _load(config_path)
    typer.echo(yaml.safe_dump(params.model_dump(mode="json"), sort_keys=False).rstrip())


__all__ = ["app", "generate", "show_config", "resolve_target"]
