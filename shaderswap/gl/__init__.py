"""OpenGL layer of shaderswap (gl package).

Everything that touches GL state lives here and goes through an explicit
:class:`GLContext`, e.g.:

    from shaderswap.gl import GameWindow, ShaderProgram

"""

from . import _platform   # noqa: F401  MUST be first; sets PYOPENGL_PLATFORM

from .buffers import Geometry, VertexArray, VertexBuffer, create_triangle
from .context import GLContext
from .program import NOT_FOUND, ProgramState, ShaderProgram
from .shaders import get_shader_dir, get_shader_paths, load_shader_sources
from .tracking import HandleRegistry
from .window import GameWindow

__all__ = [
    'GLContext', 'GameWindow', 'HandleRegistry',
    'ShaderProgram', 'ProgramState', 'NOT_FOUND',
    'Geometry', 'VertexArray', 'VertexBuffer', 'create_triangle',
    'get_shader_dir', 'get_shader_paths', 'load_shader_sources',
]
