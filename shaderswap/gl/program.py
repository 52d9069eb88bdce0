"""Linked GLSL shader programs with cached uniform locations.

A :class:`ShaderProgram` is built in one call from a vertex and a fragment
source. Either a fully linked program comes back or a
:class:`~shaderswap.errors.CompileError` tagged with the failing stage is
raised; intermediate GL objects are always released.

Uniform setters are tolerant: writing to a uniform the driver does not know
(misspelt, or optimized out) is a no-op with a single warning per name.
This keeps shader variants that omit some uniforms usable.
"""

import enum
import logging

import numpy as np

from ..errors import CompileError, PreconditionViolation
from ..utils.types import ShaderStage
from .shaders import load_shader_sources

# Module logger
logger = logging.getLogger(__name__)

# Location returned by glGetUniformLocation for unknown uniforms.
NOT_FOUND = -1


class ProgramState(enum.Enum):
    UNINITIALIZED = 1
    LINKED = 2
    DISPOSED = 3


def _info_log(log):
    if isinstance(log, bytes):
        log = log.decode("utf-8", errors="replace")
    return (log or "").strip()


def _compile_stage(gl, stage, source):
    """Compile one shader stage and return its handle.

    The shader object is deleted again before raising on failure.
    """
    shader_type = gl.GL_VERTEX_SHADER if stage is ShaderStage.VERTEX else gl.GL_FRAGMENT_SHADER
    shader = gl.glCreateShader(shader_type)
    gl.glShaderSource(shader, source)
    gl.glCompileShader(shader)
    if not gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS):
        log = _info_log(gl.glGetShaderInfoLog(shader))
        gl.glDeleteShader(shader)
        logger.error("Error compiling %s shader: %s", stage.value, log)
        raise CompileError(stage, log)
    return shader


def _link_program(gl, vertex_shader, fragment_shader):
    """Link two compiled stages into a program and detach them again."""
    program = gl.glCreateProgram()
    gl.glAttachShader(program, vertex_shader)
    gl.glAttachShader(program, fragment_shader)
    gl.glLinkProgram(program)
    if not gl.glGetProgramiv(program, gl.GL_LINK_STATUS):
        log = _info_log(gl.glGetProgramInfoLog(program))
        gl.glDeleteProgram(program)
        logger.error("Error linking shader program: %s", log)
        raise CompileError(ShaderStage.LINK, log)
    gl.glDetachShader(program, vertex_shader)
    gl.glDetachShader(program, fragment_shader)
    return program


class ShaderProgram:
    """A linked vertex+fragment program bound to one :class:`GLContext`.

    Do not instantiate directly; use :meth:`compile_and_link` or
    :meth:`from_files`.

    Attributes
    ----------
    handle : int
        OpenGL program object name.
    state : ProgramState
        ``LINKED`` for every instance handed to callers, ``DISPOSED`` after
        :meth:`dispose`.
    """

    def __init__(self, ctx):
        self._ctx = ctx
        self.handle = 0
        self.state = ProgramState.UNINITIALIZED
        self._uniform_locations = {}
        self._warned_missing = set()

    def __repr__(self):
        return f"ShaderProgram(handle={self.handle}, state={self.state.name})"

    @classmethod
    def compile_and_link(cls, ctx, vertex_source, fragment_source):
        """Compile both stages, link them and cache the active uniforms.

        Parameters
        ----------
        ctx : GLContext
            Context the program is created on; must be current.
        vertex_source, fragment_source : str
            GLSL source text of the two stages.

        Returns
        -------
        ShaderProgram
            A linked program.

        Raises
        ------
        ValueError
            If either source is empty.
        CompileError
            If a stage fails to compile or the program fails to link. The
            error carries the stage and the driver log.
        PreconditionViolation
            If ``ctx`` is not current.
        """
        for stage, source in ((ShaderStage.VERTEX, vertex_source),
                              (ShaderStage.FRAGMENT, fragment_source)):
            if not isinstance(source, str) or not source.strip():
                raise ValueError(f"{stage.value} shader source must be a non-empty string")
        ctx.require_current("compile a shader program")

        gl = ctx.gl
        vertex_shader = _compile_stage(gl, ShaderStage.VERTEX, vertex_source)
        try:
            fragment_shader = _compile_stage(gl, ShaderStage.FRAGMENT, fragment_source)
            try:
                handle = _link_program(gl, vertex_shader, fragment_shader)
            finally:
                gl.glDeleteShader(fragment_shader)
        finally:
            gl.glDeleteShader(vertex_shader)

        program = cls(ctx)
        program.handle = handle
        program.state = ProgramState.LINKED
        ctx.live_handles.track("ShaderProgram", handle)
        program.cache_active_uniforms()
        logger.debug("Shader Program :: %s :: linked", handle)
        return program

    @classmethod
    def from_files(cls, ctx, vertex_path, fragment_path):
        """Read two UTF-8 source files and build a program from them.

        Raises
        ------
        MissingResourceError
            If either file does not exist.
        """
        vertex_source, fragment_source = load_shader_sources(vertex_path, fragment_path)
        return cls.compile_and_link(ctx, vertex_source, fragment_source)

    def cache_active_uniforms(self):
        """Populate the location cache with every active uniform.

        Run once right after linking. Safe to call again; it only ever adds
        entries.

        Returns
        -------
        dict
            Copy of the name → location cache.
        """
        self._check_linked("enumerate uniforms")
        gl = self._ctx.gl
        count = gl.glGetProgramiv(self.handle, gl.GL_ACTIVE_UNIFORMS)
        for index in range(int(count)):
            name = gl.glGetActiveUniform(self.handle, index)[0]
            if isinstance(name, bytes):
                name = name.decode("utf-8")
            location = gl.glGetUniformLocation(self.handle, name)
            if location != NOT_FOUND:
                self._uniform_locations[name] = location
        return dict(self._uniform_locations)

    @property
    def uniforms(self):
        return dict(self._uniform_locations)

    def _check_linked(self, action):
        if self.state is not ProgramState.LINKED:
            raise PreconditionViolation(
                f"Cannot {action} on shader program {self.handle}: state is {self.state.name}."
            )

    def use(self):
        """Make this program the current one for subsequent draw calls."""
        self._check_linked("use")
        logger.debug("Shader Program :: %s :: use", self.handle)
        self._ctx.use_program(self.handle)

    def uniform_location(self, name):
        """Return the location of uniform ``name``, or ``-1`` if it is unknown.

        Known locations are cached. Unknown or inactive uniforms are never
        cached and are warned about once per name for the lifetime of the
        program.
        """
        self._check_linked("look up uniforms")
        location = self._uniform_locations.get(name)
        if location is not None:
            return location

        location = self._ctx.gl.glGetUniformLocation(self.handle, name)
        if location == NOT_FOUND:
            if name in self._warned_missing:
                logger.debug("Uniform '%s' not found in shader program %s.", name, self.handle)
            else:
                self._warned_missing.add(name)
                logger.warning("Uniform '%s' not found in shader or not active.", name)
            return NOT_FOUND

        self._uniform_locations[name] = location
        return location

    def _prepare_write(self, setter, name, value):
        self.use()
        logger.debug("Shader Program :: %s :: %s (%s, %s)", self.handle, setter, name, value)
        return self.uniform_location(name)

    def set_bool(self, name, value):
        location = self._prepare_write("set_bool", name, value)
        if location != NOT_FOUND:
            self._ctx.gl.glUniform1i(location, 1 if value else 0)

    def set_int(self, name, value):
        location = self._prepare_write("set_int", name, value)
        if location != NOT_FOUND:
            self._ctx.gl.glUniform1i(location, int(value))

    def set_float(self, name, value):
        location = self._prepare_write("set_float", name, value)
        if location != NOT_FOUND:
            self._ctx.gl.glUniform1f(location, float(value))

    def set_vector2(self, name, value):
        location = self._prepare_write("set_vector2", name, value)
        if location != NOT_FOUND:
            x, y = (float(v) for v in value)
            self._ctx.gl.glUniform2f(location, x, y)

    def set_vector3(self, name, value):
        """Write a ``vec3`` uniform from a :class:`pyrr.Vector3` or any 3-sequence."""
        location = self._prepare_write("set_vector3", name, value)
        if location != NOT_FOUND:
            x, y, z = (float(v) for v in value)
            self._ctx.gl.glUniform3f(location, x, y, z)

    def set_vector4(self, name, value):
        location = self._prepare_write("set_vector4", name, value)
        if location != NOT_FOUND:
            x, y, z, w = (float(v) for v in value)
            self._ctx.gl.glUniform4f(location, x, y, z, w)

    def set_matrix4(self, name, value):
        """Write a ``mat4`` uniform from a 4x4 :class:`pyrr.Matrix44` or array.

        pyrr matrices are row-major with the translation in the last row,
        which is exactly the memory layout GL expects without transposing.
        """
        matrix = np.asarray(value, dtype=np.float32)
        if matrix.shape != (4, 4):
            raise ValueError(f"set_matrix4 expects a 4x4 matrix, got shape {matrix.shape}")
        location = self._prepare_write("set_matrix4", name, value)
        if location != NOT_FOUND:
            gl = self._ctx.gl
            gl.glUniformMatrix4fv(location, 1, gl.GL_FALSE, matrix)

    def dispose(self):
        """Delete the GL program.

        Idempotent: later calls do nothing. The first call requires the
        owning context to be current.

        Raises
        ------
        PreconditionViolation
            If the context is not current on the first call.
        """
        if self.state is ProgramState.DISPOSED:
            return
        if self.state is ProgramState.LINKED:
            self._ctx.require_current("dispose a shader program")
            self._ctx.gl.glDeleteProgram(self.handle)
            self._ctx.live_handles.release("ShaderProgram", self.handle)
        self.state = ProgramState.DISPOSED
        self._uniform_locations.clear()
