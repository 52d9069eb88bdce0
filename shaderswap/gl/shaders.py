"""Shader source files shipped inside the package."""

import logging
import os
from pathlib import Path

from ..errors import MissingResourceError

# Module logger
logger = logging.getLogger(__name__)

VERTEX_SHADER = "basic.vert"
BASIC_FRAGMENT_SHADER = "basic.frag"
UNIFORM_FRAGMENT_SHADER = "uniform.frag"

# Uniform names read by uniform.frag.
TIME_UNIFORM = "uTime"
TINT_UNIFORM = "uTint"


def get_shader_dir():
    """Return the directory holding the bundled GLSL 330 sources.

    Returns
    -------
    pathlib.Path
        ``shaderswap/shaders`` inside the installed package.
    """
    return Path(__file__).resolve().parents[1] / "shaders"


def get_shader_paths(shader_dir=None):
    """Return the vertex, basic fragment and uniform fragment source paths.

    Parameters
    ----------
    shader_dir : str or os.PathLike or None, optional
        Directory to look in. Defaults to :func:`get_shader_dir`.

    Returns
    -------
    vertex, basic_fragment, uniform_fragment : tuple[pathlib.Path, ...]
        Paths of the three source files. They are not checked for existence.
    """
    root = Path(shader_dir) if shader_dir is not None else get_shader_dir()
    return (
        root / VERTEX_SHADER,
        root / BASIC_FRAGMENT_SHADER,
        root / UNIFORM_FRAGMENT_SHADER,
    )


def check_shader_files(*paths):
    """Raise :class:`MissingResourceError` listing every path that does not exist."""
    missing = [p for p in paths if not os.path.isfile(p)]
    if missing:
        logger.error("Shader files not found: %s", ", ".join(str(p) for p in missing))
        raise MissingResourceError(missing)


def load_shader_sources(vertex_path, fragment_path):
    """Read a vertex and a fragment shader source file.

    Both files are checked before either is read, so a missing fragment
    file never results in a half-loaded pair.

    Parameters
    ----------
    vertex_path, fragment_path : str or os.PathLike
        Paths to UTF-8 GLSL source files.

    Returns
    -------
    vertex_source, fragment_source : tuple[str, str]
        The file contents.

    Raises
    ------
    MissingResourceError
        If either file does not exist.
    """
    check_shader_files(vertex_path, fragment_path)
    vertex_source = Path(vertex_path).read_text(encoding="utf-8")
    fragment_source = Path(fragment_path).read_text(encoding="utf-8")
    return vertex_source, fragment_source
