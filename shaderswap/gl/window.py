"""GLFW window, OpenGL context creation and the event pump.

:class:`GameWindow` is the only place that talks to GLFW directly. It
creates an OpenGL 3.3 Core Profile + ``FORWARD_COMPAT`` context, wraps it in
a :class:`~shaderswap.gl.context.GLContext` and drives a listener object
through the demo's callbacks::

    listener.on_load()
    listener.on_resize(width, height)
    while window is open:
        listener.on_key(key)            # for every key press
        listener.on_resize(w, h)        # for every framebuffer resize
        listener.on_update(dt)
        listener.on_render()

All callbacks run sequentially on the thread that created the window.
"""

import logging
import warnings

import glfw

from .context import GLContext

# Module logger
logger = logging.getLogger(__name__)


def _check_window_args(width, height, title):
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
    if not isinstance(title, str) or not title.strip():
        raise ValueError("title must be a non-empty string")


def _center_window(window, width, height):
    monitor = glfw.get_primary_monitor()
    if not monitor:
        return
    mode = glfw.get_video_mode(monitor)
    if mode is None:
        return
    glfw.set_window_pos(
        window,
        max(0, (mode.size.width - width) // 2),
        max(0, (mode.size.height - height) // 2),
    )


class GameWindow:
    """A GLFW window with a current OpenGL context.

    Use :meth:`create` rather than the constructor.

    Parameters
    ----------
    window : GLFWwindow
        Native GLFW window handle.
    context : GLContext
        Context token for the window's OpenGL context.
    """

    def __init__(self, window, context):
        self.handle = window
        self.context = context
        self._terminated = False

    @classmethod
    def create(cls, width, height, title, visible=True):
        """Open a window and make its OpenGL 3.3 core context current.

        Parameters
        ----------
        width, height : int
            Client area size in pixels; must be positive.
        title : str
            Window title; must not be blank.
        visible : bool, optional, default True
            If False create an invisible window.

        Returns
        -------
        GameWindow
            The new window.

        Raises
        ------
        ValueError
            If the size or title is invalid. GLFW is not initialised.
        RuntimeError
            If GLFW or the OpenGL context could not be created.
        """
        _check_window_args(width, height, title)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            if not glfw.init():
                raise RuntimeError("Could not initialise GLFW.")

        glfw.default_window_hints()
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        if not visible:
            glfw.window_hint(glfw.VISIBLE, glfw.FALSE)

        window = glfw.create_window(width, height, title, None, None)
        if not window:
            glfw.terminate()
            raise RuntimeError(
                "Could not create a GLFW window/context. OpenGL 3.3 core context unavailable."
            )
        _center_window(window, width, height)

        context = GLContext(window)
        context.make_current()
        logger.debug("Created %dx%d window %r", width, height, title)
        return cls(window, context)

    def framebuffer_size(self):
        return glfw.get_framebuffer_size(self.handle)

    def swap_buffers(self):
        glfw.swap_buffers(self.handle)

    def close(self):
        """Ask the event pump to stop after the current frame."""
        glfw.set_window_should_close(self.handle, True)

    def should_close(self):
        return bool(glfw.window_should_close(self.handle))

    def run(self, listener):
        """Drive ``listener`` until the window is closed.

        ``listener.on_load`` runs to completion (or raises) before the first
        update or render callback.
        """

        def _key_cb(_win, key, _scancode, action, _mods):
            if action == glfw.PRESS:
                listener.on_key(key)

        def _resize_cb(_win, width, height):
            listener.on_resize(width, height)

        listener.on_load()
        listener.on_resize(*self.framebuffer_size())

        glfw.set_key_callback(self.handle, _key_cb)
        glfw.set_framebuffer_size_callback(self.handle, _resize_cb)

        previous = glfw.get_time()
        while not self.should_close():
            glfw.poll_events()
            now = glfw.get_time()
            listener.on_update(now - previous)
            previous = now
            listener.on_render()

    def terminate(self):
        """Destroy the window and shut GLFW down.

        Any GPU handle still registered on the context is reported first.
        Idempotent.
        """
        if self._terminated:
            return
        self._terminated = True
        leaked = self.context.live_handles.report()
        if leaked:
            logger.warning("%d GPU object(s) leaked at context teardown.", leaked)
        self.context.release()
        glfw.destroy_window(self.handle)
        glfw.terminate()
