"""OpenGL runtime diagnostics (top-level module)."""

import os
import platform
import sys
from functools import partial
from importlib.metadata import PackageNotFoundError, version
from typing import IO, Optional

import glfw

from .gl.shaders import get_shader_paths

# Libraries whose versions matter when a shader or window fails to come up.
_GL_STACK = ("numpy", "pyrr")


def _glfw_version():
    raw = glfw.get_version_string()
    return raw.decode("utf-8", "replace") if isinstance(raw, bytes) else str(raw)


def _pyopengl_version():
    import OpenGL  # noqa: PLC0415

    return OpenGL.__version__


def sys_info(fid: Optional[IO] = None, shader_dir=None):
    """Print the OpenGL runtime setup for debugging startup failures.

    Nothing here creates a window or a GL context: the report only covers
    what can be known before ``glfw.init()``.

    Parameters
    ----------
    fid : file-like, default=None
        The file to write to, passed to :func:`print`.
        Can be None to use :data:`sys.stdout`.
    shader_dir : str or os.PathLike or None, optional
        Shader directory to check instead of the bundled one.
    """
    ljust = 26
    out = partial(print, end="", file=fid)
    package = __package__.split(".")[0]

    try:
        pkg_version = version(package)
    except PackageNotFoundError:
        pkg_version = "Not installed."
    out(f"{package}:".ljust(ljust) + pkg_version + "\n")
    out("Platform:".ljust(ljust) + platform.platform() + "\n")
    out("Python:".ljust(ljust) + sys.version.replace("\n", " ") + "\n")

    out("\nOpenGL runtime\n")
    out("GLFW:".ljust(ljust) + _glfw_version() + "\n")
    out("PyOpenGL:".ljust(ljust) + _pyopengl_version() + "\n")
    out("PYOPENGL_PLATFORM:".ljust(ljust) + os.environ.get("PYOPENGL_PLATFORM", "(default)") + "\n")
    display = os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY") or "None"
    out("Display:".ljust(ljust) + display + "\n")
    for dep in _GL_STACK:
        try:
            dep_version = version(dep)
        except PackageNotFoundError:
            dep_version = "Not found."
        out(f"{dep}:".ljust(ljust) + dep_version + "\n")

    out("\nShader sources\n")
    for path in get_shader_paths(shader_dir):
        status = "found" if path.is_file() else "MISSING"
        out(f"{path.name}:".ljust(ljust) + f"{status} ({path})\n")
