"""Shared fixtures: write Java sources to a temporary source root."""

import textwrap
from pathlib import Path
from typing import Callable, Dict

import pytest

from implgen.core.introspection import JavaSourceIndex


def write_sources(root: Path, sources: Dict[str, str]) -> Path:
    for relative, text in sources.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
    return root


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def make_index(source_root: Path) -> Callable[[Dict[str, str]], JavaSourceIndex]:
    """Write {relative path: source} under source_root and index it."""

    def _make(sources: Dict[str, str], include_jdk_stubs: bool = True) -> JavaSourceIndex:
        write_sources(source_root, sources)
        return JavaSourceIndex([source_root], include_jdk_stubs=include_jdk_stubs)

    return _make
