"""Vertex array and vertex buffer handles, and the demo triangle.

These are thin wrappers around GL object names. Each one registers itself
in the context's :class:`~shaderswap.gl.tracking.HandleRegistry` and can be
disposed any number of times.
"""

import ctypes
import logging

import numpy as np

# Module logger
logger = logging.getLogger(__name__)

# Interleaved (x, y, r, g, b) per vertex.
TRIANGLE_VERTICES = np.array(
    [
        # positions      # colors
        -0.5,  0.5,      1.0, 0.0, 0.0,  # top
        -0.5, -0.5,      0.0, 1.0, 0.0,  # bottom left
         0.5, -0.5,      0.0, 0.0, 1.0,  # bottom right
    ],
    dtype=np.float32,
)

POSITION_COMPONENTS = 2
COLOR_COMPONENTS = 3
FLOATS_PER_VERTEX = POSITION_COMPONENTS + COLOR_COMPONENTS
VERTEX_STRIDE = FLOATS_PER_VERTEX * TRIANGLE_VERTICES.itemsize


class VertexArray:
    """OpenGL vertex array object."""

    def __init__(self, ctx):
        self._ctx = ctx
        self.handle = int(ctx.gl.glGenVertexArrays(1))
        self._disposed = False
        ctx.live_handles.track("VertexArray", self.handle)

    def bind(self):
        self._ctx.gl.glBindVertexArray(self.handle)

    def unbind(self):
        self._ctx.gl.glBindVertexArray(0)

    def enable_attribute(self, index):
        self.bind()
        self._ctx.gl.glEnableVertexAttribArray(index)

    def disable_attribute(self, index):
        self.bind()
        self._ctx.gl.glDisableVertexAttribArray(index)

    def dispose(self):
        if self._disposed:
            return
        self._ctx.require_current("dispose a vertex array")
        self._ctx.gl.glDeleteVertexArrays(1, [self.handle])
        self._ctx.live_handles.release("VertexArray", self.handle)
        self._disposed = True


class VertexBuffer:
    """OpenGL array buffer holding float32 vertex data."""

    def __init__(self, ctx):
        self._ctx = ctx
        self.handle = int(ctx.gl.glGenBuffers(1))
        self._disposed = False
        ctx.live_handles.track("VertexBuffer", self.handle)

    def bind(self):
        self._ctx.gl.glBindBuffer(self._ctx.gl.GL_ARRAY_BUFFER, self.handle)

    def unbind(self):
        self._ctx.gl.glBindBuffer(self._ctx.gl.GL_ARRAY_BUFFER, 0)

    def set_data(self, data, usage=None):
        """Upload ``data`` to the buffer.

        Parameters
        ----------
        data : array-like
            Vertex data; converted to a contiguous float32 array.
        usage : GLenum, optional
            Buffer usage hint. Default is ``GL_STATIC_DRAW``.
        """
        gl = self._ctx.gl
        if usage is None:
            usage = gl.GL_STATIC_DRAW
        data = np.ascontiguousarray(data, dtype=np.float32)
        self.bind()
        gl.glBufferData(gl.GL_ARRAY_BUFFER, data.nbytes, data, usage)

    def enable_attribute(self, index):
        self.bind()
        self._ctx.gl.glEnableVertexAttribArray(index)

    def disable_attribute(self, index):
        self.bind()
        self._ctx.gl.glDisableVertexAttribArray(index)

    def dispose(self):
        if self._disposed:
            return
        self._ctx.require_current("dispose a vertex buffer")
        self._ctx.gl.glDeleteBuffers(1, [self.handle])
        self._ctx.live_handles.release("VertexBuffer", self.handle)
        self._disposed = True


class Geometry:
    """Immutable vertex data uploaded once and drawn as a triangle list.

    Parameters
    ----------
    ctx : GLContext
        Owning context.
    vertex_array : VertexArray
        VAO holding the attribute layout.
    vertex_buffer : VertexBuffer
        VBO holding the interleaved vertex data.
    vertex_count : int
        Number of vertices passed to ``glDrawArrays``.
    """

    def __init__(self, ctx, vertex_array, vertex_buffer, vertex_count):
        self._ctx = ctx
        self.vertex_array = vertex_array
        self.vertex_buffer = vertex_buffer
        self.vertex_count = vertex_count

    def draw(self):
        gl = self._ctx.gl
        self.vertex_array.bind()
        gl.glDrawArrays(gl.GL_TRIANGLES, 0, self.vertex_count)
        self.vertex_array.unbind()

    def dispose(self):
        """Release the buffer, then the array. Idempotent."""
        self.vertex_buffer.dispose()
        self.vertex_array.dispose()


def create_triangle(ctx, vertices=TRIANGLE_VERTICES):
    """Upload the interleaved triangle and configure its attribute layout.

    Attribute 0 receives the 2D position and attribute 1 the RGB color.

    Parameters
    ----------
    ctx : GLContext
        Current context.
    vertices : numpy.ndarray, optional
        Flat float32 array of ``(x, y, r, g, b)`` tuples.

    Returns
    -------
    Geometry
        The uploaded triangle.
    """
    ctx.require_current("upload geometry")
    gl = ctx.gl
    vertex_array = VertexArray(ctx)
    try:
        vertex_array.bind()
        vertex_buffer = VertexBuffer(ctx)
    except Exception:
        vertex_array.dispose()
        raise

    try:
        vertex_buffer.set_data(vertices)
        gl.glVertexAttribPointer(
            0, POSITION_COMPONENTS, gl.GL_FLOAT, gl.GL_FALSE, VERTEX_STRIDE,
            ctypes.c_void_p(0),
        )
        gl.glEnableVertexAttribArray(0)
        gl.glVertexAttribPointer(
            1, COLOR_COMPONENTS, gl.GL_FLOAT, gl.GL_FALSE, VERTEX_STRIDE,
            ctypes.c_void_p(POSITION_COMPONENTS * vertices.itemsize),
        )
        gl.glEnableVertexAttribArray(1)
        vertex_array.unbind()
    except Exception:
        vertex_buffer.dispose()
        vertex_array.dispose()
        raise

    vertex_count = len(vertices) // FLOATS_PER_VERTEX
    logger.debug("Uploaded %d vertices (%d bytes)", vertex_count, vertices.nbytes)
    return Geometry(ctx, vertex_array, vertex_buffer, vertex_count)
