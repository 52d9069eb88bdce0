"""Checks on the packaging metadata in pyproject.toml."""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

_PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


@pytest.fixture(scope="module")
def pyproject():
    with open(_PYPROJECT, "rb") as f:
        return tomllib.load(f)


class TestPyproject:
    def test_no_working_document_as_readme(self, pyproject):
        readme = pyproject["project"].get("readme")
        assert readme is None or Path(_PYPROJECT.parent, readme).name.startswith("README")

    def test_shader_sources_declared_once(self, pyproject):
        package_data = pyproject["tool"]["setuptools"]["package-data"]
        assert package_data == {"shaderswap": ["shaders/*.vert", "shaders/*.frag"]}

    def test_shader_sources_match_bundled_files(self, pyproject):
        root = _PYPROJECT.parent / "shaderswap"
        bundled = sorted(p.name for pattern in pyproject["tool"]["setuptools"]["package-data"]["shaderswap"]
                         for p in root.glob(pattern))
        assert bundled == ["basic.frag", "basic.vert", "uniform.frag"]
