"""shaderswap: a minimal OpenGL demo that toggles between two shaders.

The demo opens a GLFW window, compiles two GLSL programs, uploads a single
vertex-colored triangle and draws it every frame. SPACE switches between the
``basic`` program and the ``uniform`` program (animated by ``uTime`` and
tinted by ``uTint``); ESC closes the window.

From the command line::

    shaderswap --width 800 --height 600

From Python::

    from shaderswap import Engine, GameWindow

    window = GameWindow.create(800, 600, "Intro to OpenGL")
    try:
        with Engine(window) as engine:
            engine.run()
    finally:
        window.terminate()

"""

from ._config import sys_info  # noqa: F401
from ._version import __version__  # noqa: F401
from .engine import Engine, FrameState
from .errors import CompileError, MissingResourceError, PreconditionViolation, ShaderSwapError
from .gl import GameWindow, GLContext, ShaderProgram
from .resources import DemoResources
from .utils.types import ShaderStage, ShaderVariant

__all__ = [
    "__version__",
    "sys_info",
    "Engine",
    "FrameState",
    "DemoResources",
    "GameWindow",
    "GLContext",
    "ShaderProgram",
    "ShaderStage",
    "ShaderVariant",
    "ShaderSwapError",
    "CompileError",
    "MissingResourceError",
    "PreconditionViolation",
]
