"""Frame driver for the shader-toggle demo.

:class:`Engine` is handed to a window's event pump (see
:meth:`shaderswap.gl.window.GameWindow.run`) and reacts to its five
callbacks. It owns the :class:`FrameState`: accumulated time and which of
the two shader programs is active.
"""

import logging
from dataclasses import dataclass

import glfw
import pyrr

from .errors import PreconditionViolation
from .gl.shaders import TIME_UNIFORM, TINT_UNIFORM
from .resources import DemoResources
from .utils.types import ShaderVariant

# Module logger
logger = logging.getLogger(__name__)

CLEAR_COLOR = (0.2, 0.3, 0.3, 1.0)
TINT = pyrr.Vector3([1.0, 1.0, 1.0])

TOGGLE_KEY = glfw.KEY_SPACE
QUIT_KEY = glfw.KEY_ESCAPE


@dataclass
class FrameState:
    """Mutable per-window state of the demo.

    Attributes
    ----------
    time : float
        Seconds accumulated from update ticks.
    active : int
        Index into ``variants`` of the program drawn next.
    variants : tuple of ShaderVariant
        The fixed set of selectable programs.
    """

    time: float = 0.0
    active: int = 0
    variants: tuple = tuple(ShaderVariant)

    @property
    def variant(self):
        return self.variants[self.active]

    def toggle(self):
        """Select the next program and return its variant."""
        self.active = (self.active + 1) % len(self.variants)
        return self.variant


class Engine:
    """Sequences load, update, render, resize and key input.

    Parameters
    ----------
    window : GameWindow
        Window providing ``context``, ``swap_buffers()``, ``close()`` and
        ``run(listener)``.
    shader_dir : str or os.PathLike or None, optional
        Override for the shader source directory.
    """

    def __init__(self, window, shader_dir=None):
        self.window = window
        self.ctx = window.context
        self.resources = DemoResources(self.ctx, shader_dir)
        self.state = None

    def _require_loaded(self, action):
        if self.state is None:
            raise PreconditionViolation(f"Cannot {action} before on_load() has succeeded.")

    def on_load(self):
        if self.state is not None:
            raise PreconditionViolation("on_load() was already called; dispose() the engine first.")
        logger.info("OpenGL Version: %s", self.ctx.version())
        self.ctx.set_clear_color(*CLEAR_COLOR)
        self.resources.load()
        self.state = FrameState()
        logger.info("Press SPACE to switch shaders.")
        logger.info("Press ESC to exit.")

    def on_update(self, delta_seconds):
        self._require_loaded("update")
        self.state.time += delta_seconds

    def on_render(self):
        """Draw one frame: clear, bind, set uniforms, draw, present."""
        self._require_loaded("render")
        self.ctx.clear()

        variant = self.state.variant
        program = self.resources.program(variant)
        program.use()
        if variant is ShaderVariant.UNIFORM:
            program.set_float(TIME_UNIFORM, self.state.time)
            program.set_vector3(TINT_UNIFORM, TINT)

        self.resources.geometry.draw()
        self.window.swap_buffers()

    def on_resize(self, width, height):
        if width < 0 or height < 0:
            raise ValueError(f"Viewport size must be non-negative, got {width}x{height}")
        self.ctx.viewport(0, 0, width, height)

    def on_key(self, key):
        """Handle a key press.

        Returns
        -------
        ShaderVariant or None
            The newly active variant when the toggle key was pressed.
        """
        if key == TOGGLE_KEY:
            self._require_loaded("switch shaders")
            variant = self.state.toggle()
            logger.info("Switched to %s", variant.label)
            return variant
        if key == QUIT_KEY:
            self.window.close()
        return None

    def run(self):
        """Run the window's event pump, then release all GPU resources."""
        try:
            self.window.run(self)
        finally:
            self.dispose()

    def dispose(self):
        self.resources.dispose()
        self.state = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
