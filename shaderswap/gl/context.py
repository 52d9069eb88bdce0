"""Explicit OpenGL context token.

All GL-state-mutating code in shaderswap goes through a :class:`GLContext`
instead of calling ``OpenGL.GL`` as ambient global state. The context
carries the GL function namespace, knows whether it is current on this
thread, and owns the "current program" selector that only
:meth:`shaderswap.gl.program.ShaderProgram.use` may change.

Rendering is single-threaded: one context, one render thread, no locks.
"""

import logging

import glfw

from ..errors import PreconditionViolation
from .tracking import HandleRegistry

# Module logger
logger = logging.getLogger(__name__)


def _load_gl():
    """Import and return the PyOpenGL ``GL`` namespace."""
    import OpenGL.GL as gl  # noqa: PLC0415

    return gl


class GLContext:
    """Handle on one OpenGL context.

    Parameters
    ----------
    window : GLFWwindow or None, optional
        GLFW window owning the context. ``None`` for a context made current
        by someone else (offscreen contexts, tests).
    gl_api : module-like, optional
        Object exposing the ``gl*`` functions and ``GL_*`` constants.
        Defaults to ``OpenGL.GL``, imported on first use so that
        ``PYOPENGL_PLATFORM`` can be set beforehand.

    Attributes
    ----------
    gl : module-like
        GL function namespace used by every wrapper bound to this context.
    current_program : int
        Handle of the program last bound through :meth:`use_program`
        (0 when none).
    live_handles : HandleRegistry
        GPU objects allocated on this context and not yet disposed.
    """

    def __init__(self, window=None, gl_api=None):
        self.window = window
        self.gl = gl_api if gl_api is not None else _load_gl()
        self.current_program = 0
        self.live_handles = HandleRegistry()
        self._current = False

    @property
    def is_current(self):
        return self._current

    def make_current(self):
        if self.window is not None:
            glfw.make_context_current(self.window)
        self._current = True

    def release(self):
        """Detach the context from this thread."""
        if self.window is not None:
            glfw.make_context_current(None)
        self._current = False
        self.current_program = 0

    def require_current(self, action):
        """Raise :class:`PreconditionViolation` unless the context is current.

        Parameters
        ----------
        action : str
            Description of the attempted operation, used in the message.
        """
        if not self._current:
            raise PreconditionViolation(
                f"Cannot {action}: the OpenGL context is not current."
            )

    def use_program(self, handle):
        self.require_current("bind a shader program")
        self.gl.glUseProgram(handle)
        self.current_program = handle

    def set_clear_color(self, red, green, blue, alpha=1.0):
        self.gl.glClearColor(red, green, blue, alpha)

    def clear(self):
        self.gl.glClear(self.gl.GL_COLOR_BUFFER_BIT)

    def viewport(self, x, y, width, height):
        self.gl.glViewport(x, y, width, height)

    def version(self):
        """Return the driver's ``GL_VERSION`` string."""
        version = self.gl.glGetString(self.gl.GL_VERSION)
        if isinstance(version, bytes):
            version = version.decode("utf-8", errors="replace")
        return version
