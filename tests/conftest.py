"""Shared test fixtures for routegen."""

from __future__ import annotations

from pathlib import Path

import pytest

from routegen.config import GeneratorConfig


def write_template(root: Path, relative: str, source: str) -> Path:
    """Write a compiled template module below *root* and return its path."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Create a template tree exercising every routing rule.

    Layout (below ``web/app``)::

        page_templ.py              Page
        layout_templ.py            Layout
        navbar_templ.py            NavBar, Button(text)
        admin/page_templ.py        Page, AdminPage (bad suffix)
        error-demo/page_templ.py   Page
        users/id_/page_templ.py    Page(data: UserData)
        users/id_/error_templ.py   Error

    """
    root = tmp_path / "web" / "app"
    write_template(root, "page_templ.py", "def Page():\n    return 'home'\n")
    write_template(root, "layout_templ.py", "def Layout():\n    return 'layout'\n")
    write_template(
        root,
        "navbar_templ.py",
        "def NavBar():\n    return 'nav'\n\n\ndef Button(text: str):\n    return text\n",
    )
    write_template(
        root,
        "admin/page_templ.py",
        "def Page():\n    return 'admin'\n\n\ndef AdminPage():\n    return 'nope'\n",
    )
    write_template(root, "error-demo/page_templ.py", "def Page():\n    return 'demo'\n")
    write_template(
        root,
        "users/id_/page_templ.py",
        "from myproject.dataservices import UserData\n\n\n"
        "def Page(data: UserData):\n    return data\n",
    )
    write_template(root, "users/id_/error_templ.py", "def Error():\n    return 'oops'\n")
    return root


@pytest.fixture
def config(app_root: Path, tmp_path: Path) -> GeneratorConfig:
    """A GeneratorConfig over ``app_root`` with deterministic keys."""
    return GeneratorConfig(
        scan_path=app_root,
        module_name="myproject",
        output_dir=tmp_path / "generated",
        stable_keys=True,
    )
