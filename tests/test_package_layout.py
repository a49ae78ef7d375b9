# Tests for verifying the package skeleton is importable and documented.

import importlib
import pkgutil
from importlib import resources

import typer

import randfill
from randfill import cli


def _modules() -> list[str]:
    return [info.name for info in pkgutil.walk_packages(randfill.__path__, randfill.__name__ + ".")]


def test_root_package_has_docstring() -> None:
    """The root package should define a module docstring."""
    assert randfill.__doc__ and randfill.__doc__.strip()


def test_all_modules_have_docstrings() -> None:
    """Ensure every submodule can be imported and has a docstring."""
    for name in _modules():
        module = importlib.import_module(name)
        assert module.__doc__ and module.__doc__.strip(), f"Missing docstring in {name}"


def test_exported_names_exist() -> None:
    for name in _modules():
        module = importlib.import_module(name)
        for exported in getattr(module, "__all__", ()):
            assert hasattr(module, exported), f"{name} exports missing {exported}"


def test_defaults_shipped_with_package() -> None:
    assert resources.files("randfill.config").joinpath("defaults.yml").is_file()


def test_console_script_target_is_typer_app() -> None:
    assert isinstance(cli.app, typer.Typer)
