"""Keep ``__init__conf__`` constants aligned with pyproject.toml.

The LAYEREDCONF_* values decide where configuration files are searched
for. If they drift from the project metadata, the layered source silently
reads nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import rtoml

from confstack import __init__conf__


def _load_pyproject() -> dict[str, Any]:
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    return rtoml.load(pyproject_path)


@pytest.mark.os_agnostic
def test_layeredconf_slug_matches_project_name() -> None:
    """The slug names the Linux config directory (``~/.config/<slug>/``)."""
    project_name = _load_pyproject()["project"]["name"]

    expected_slug = project_name.replace("_", "-")
    assert expected_slug == __init__conf__.LAYEREDCONF_SLUG, (
        f"LAYEREDCONF_SLUG '{__init__conf__.LAYEREDCONF_SLUG}' does not match project name '{project_name}'"
    )


@pytest.mark.os_agnostic
@pytest.mark.parametrize("constant", ["LAYEREDCONF_VENDOR", "LAYEREDCONF_APP"])
def test_layeredconf_path_constants_are_not_blank(constant: str) -> None:
    value = getattr(__init__conf__, constant)
    assert value.strip(), f"{constant} is empty or whitespace-only"


@pytest.mark.os_agnostic
def test_version_matches_pyproject_toml() -> None:
    pyproject_version = _load_pyproject()["project"]["version"]

    assert __init__conf__.version == pyproject_version


@pytest.mark.os_agnostic
def test_name_matches_pyproject_toml() -> None:
    project_name = _load_pyproject()["project"]["name"]

    assert __init__conf__.name.replace("-", "_") == project_name.replace("-", "_")


@pytest.mark.os_agnostic
def test_shell_command_is_declared_as_console_script() -> None:
    scripts = _load_pyproject()["project"]["scripts"]

    assert scripts[__init__conf__.shell_command] == "confstack.entry:main"
