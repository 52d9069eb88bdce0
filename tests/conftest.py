"""Shared fixtures: a recording fake of the GL API and a scripted window.

``FakeGL`` implements the subset of ``OpenGL.GL`` used by shaderswap. It
keeps every call in order in ``calls`` and tracks which shader, program,
buffer and vertex array objects are alive, so tests can check both
ordering and leaks without a real OpenGL context.

Compilation fails when a source has unbalanced braces; linking fails when a
stage has no ``main``. Every declared ``uniform`` is treated as active.
"""

import re

import pytest

from shaderswap.gl.context import GLContext

_UNIFORM_RE = re.compile(r"^\s*uniform\s+\w+\s+(\w+)", re.MULTILINE)


class FakeGL:
    GL_FALSE = 0
    GL_TRUE = 1
    GL_TRIANGLES = 0x0004
    GL_FLOAT = 0x1406
    GL_VERSION = 0x1F02
    GL_COLOR_BUFFER_BIT = 0x4000
    GL_ARRAY_BUFFER = 0x8892
    GL_STATIC_DRAW = 0x88E4
    GL_FRAGMENT_SHADER = 0x8B30
    GL_VERTEX_SHADER = 0x8B31
    GL_COMPILE_STATUS = 0x8B81
    GL_LINK_STATUS = 0x8B82
    GL_ACTIVE_UNIFORMS = 0x8B86

    def __init__(self):
        self.calls = []
        self._next_handle = 1
        self.shaders = {}
        self.programs = {}
        self.vertex_arrays = set()
        self.buffers = set()
        self.current_program = 0
        self.uniform_values = {}

    # -- bookkeeping -------------------------------------------------------

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def _new_handle(self):
        handle = self._next_handle
        self._next_handle += 1
        return handle

    def names(self, start=0):
        return [call[0] for call in self.calls[start:]]

    # -- shaders -----------------------------------------------------------

    def glCreateShader(self, shader_type):
        handle = self._new_handle()
        self.shaders[handle] = {"type": shader_type, "source": "", "ok": False, "log": ""}
        self._record("glCreateShader", shader_type)
        return handle

    def glShaderSource(self, shader, source):
        self.shaders[shader]["source"] = source
        self._record("glShaderSource", shader)

    def glCompileShader(self, shader):
        entry = self.shaders[shader]
        source = entry["source"]
        entry["ok"] = source.count("{") == source.count("}")
        if not entry["ok"]:
            entry["log"] = "0:12(1): error: syntax error, unexpected end of file"
        self._record("glCompileShader", shader)

    def glGetShaderiv(self, shader, pname):
        assert pname == self.GL_COMPILE_STATUS
        return self.GL_TRUE if self.shaders[shader]["ok"] else self.GL_FALSE

    def glGetShaderInfoLog(self, shader):
        return self.shaders[shader]["log"].encode()

    def glDeleteShader(self, shader):
        self.shaders.pop(shader)
        self._record("glDeleteShader", shader)

    # -- programs ----------------------------------------------------------

    def glCreateProgram(self):
        handle = self._new_handle()
        self.programs[handle] = {"attached": [], "linked": False, "uniforms": {}, "log": ""}
        self._record("glCreateProgram")
        return handle

    def glAttachShader(self, program, shader):
        self.programs[program]["attached"].append(shader)
        self._record("glAttachShader", program, shader)

    def glDetachShader(self, program, shader):
        self.programs[program]["attached"].remove(shader)
        self._record("glDetachShader", program, shader)

    def glLinkProgram(self, program):
        entry = self.programs[program]
        sources = [self.shaders[s]["source"] for s in entry["attached"]]
        entry["linked"] = all("void main" in source for source in sources)
        if entry["linked"]:
            names = []
            for source in sources:
                for name in _UNIFORM_RE.findall(source):
                    if name not in names:
                        names.append(name)
            entry["uniforms"] = {name: index for index, name in enumerate(names)}
        else:
            entry["log"] = "error: linking with uncompiled/unspecialized shader: missing main()"
        self._record("glLinkProgram", program)

    def glGetProgramiv(self, program, pname):
        entry = self.programs[program]
        if pname == self.GL_LINK_STATUS:
            return self.GL_TRUE if entry["linked"] else self.GL_FALSE
        if pname == self.GL_ACTIVE_UNIFORMS:
            return len(entry["uniforms"])
        raise AssertionError(f"unexpected pname {pname}")

    def glGetProgramInfoLog(self, program):
        return self.programs[program]["log"].encode()

    def glGetActiveUniform(self, program, index):
        name = list(self.programs[program]["uniforms"])[index]
        return name.encode(), 1, self.GL_FLOAT

    def glGetUniformLocation(self, program, name):
        self._record("glGetUniformLocation", program, name)
        return self.programs[program]["uniforms"].get(name, -1)

    def glDeleteProgram(self, program):
        self.programs.pop(program)
        self._record("glDeleteProgram", program)

    def glUseProgram(self, program):
        self.current_program = program
        self._record("glUseProgram", program)

    def _uniform(self, name, location, *values):
        self.uniform_values[(self.current_program, location)] = values
        self._record(name, location, *values)

    def glUniform1i(self, location, value):
        self._uniform("glUniform1i", location, value)

    def glUniform1f(self, location, value):
        self._uniform("glUniform1f", location, value)

    def glUniform2f(self, location, x, y):
        self._uniform("glUniform2f", location, x, y)

    def glUniform3f(self, location, x, y, z):
        self._uniform("glUniform3f", location, x, y, z)

    def glUniform4f(self, location, x, y, z, w):
        self._uniform("glUniform4f", location, x, y, z, w)

    def glUniformMatrix4fv(self, location, count, transpose, value):
        self._uniform("glUniformMatrix4fv", location, value)

    # -- buffers and drawing -----------------------------------------------

    def glGenVertexArrays(self, n):
        handle = self._new_handle()
        self.vertex_arrays.add(handle)
        self._record("glGenVertexArrays")
        return handle

    def glBindVertexArray(self, handle):
        self._record("glBindVertexArray", handle)

    def glDeleteVertexArrays(self, n, handles):
        for handle in handles:
            self.vertex_arrays.discard(handle)
        self._record("glDeleteVertexArrays", *handles)

    def glGenBuffers(self, n):
        handle = self._new_handle()
        self.buffers.add(handle)
        self._record("glGenBuffers")
        return handle

    def glBindBuffer(self, target, handle):
        self._record("glBindBuffer", target, handle)

    def glBufferData(self, target, size, data, usage):
        self._record("glBufferData", target, size)

    def glDeleteBuffers(self, n, handles):
        for handle in handles:
            self.buffers.discard(handle)
        self._record("glDeleteBuffers", *handles)

    def glVertexAttribPointer(self, index, size, type_, normalized, stride, pointer):
        self._record("glVertexAttribPointer", index, size, stride)

    def glEnableVertexAttribArray(self, index):
        self._record("glEnableVertexAttribArray", index)

    def glDisableVertexAttribArray(self, index):
        self._record("glDisableVertexAttribArray", index)

    def glDrawArrays(self, mode, first, count):
        self._record("glDrawArrays", mode, first, count, self.current_program)

    def glClear(self, mask):
        self._record("glClear", mask)

    def glClearColor(self, red, green, blue, alpha):
        self._record("glClearColor", red, green, blue, alpha)

    def glViewport(self, x, y, width, height):
        self._record("glViewport", x, y, width, height)

    def glGetString(self, name):
        return b"3.3.0 FakeGL"


class FakeWindow:
    """Stand-in for :class:`shaderswap.gl.window.GameWindow`.

    ``run`` loads the listener, resizes it once, then plays ``frames``
    update/render ticks of ``dt`` seconds. ``keys`` maps a frame index to a
    key pressed just before that frame's update.
    """

    def __init__(self, context, frames=1, keys=None, size=(800, 600), dt=1 / 60):
        self.context = context
        self.frames = frames
        self.keys = dict(keys or {})
        self.size = size
        self.dt = dt
        self.swaps = 0
        self.rendered = 0
        self.closed = False
        self.terminated = False

    def swap_buffers(self):
        self.swaps += 1
        self.context.gl._record("swap_buffers")

    def close(self):
        self.closed = True

    def run(self, listener):
        listener.on_load()
        listener.on_resize(*self.size)
        for frame in range(self.frames):
            if self.closed:
                break
            if frame in self.keys:
                listener.on_key(self.keys[frame])
            listener.on_update(self.dt)
            listener.on_render()
            self.rendered += 1

    def terminate(self):
        self.terminated = True


@pytest.fixture
def fake_gl():
    return FakeGL()


@pytest.fixture
def ctx(fake_gl):
    context = GLContext(gl_api=fake_gl)
    context.make_current()
    return context


@pytest.fixture
def make_window(ctx):
    def _make(**kwargs):
        return FakeWindow(ctx, **kwargs)
    return _make


@pytest.fixture
def shader_dir(tmp_path):
    """Writable copy of the bundled shader sources."""
    from shaderswap.gl.shaders import get_shader_paths  # noqa: PLC0415

    for path in get_shader_paths():
        (tmp_path / path.name).write_text(path.read_text(encoding="utf-8"), encoding="utf-8")
    return tmp_path
