"""Ownership of the demo's GPU resources.

:class:`DemoResources` builds both shader programs and the triangle, and
tears them down in a fixed order: programs first, then the vertex buffer,
then the vertex array. Teardown always happens before the GL context goes
away.
"""

import logging

from .errors import PreconditionViolation
from .gl.buffers import create_triangle
from .gl.program import ShaderProgram
from .gl.shaders import check_shader_files, get_shader_paths, load_shader_sources
from .utils.types import ShaderVariant

# Module logger
logger = logging.getLogger(__name__)


class DemoResources:
    """Owner of the ``basic`` and ``uniform`` programs and the triangle.

    Parameters
    ----------
    ctx : GLContext
        Context all resources are created on.
    shader_dir : str or os.PathLike or None, optional
        Directory containing ``basic.vert``, ``basic.frag`` and
        ``uniform.frag``. Defaults to the sources bundled with the package.
    """

    def __init__(self, ctx, shader_dir=None):
        self._ctx = ctx
        self.shader_dir = shader_dir
        self.programs = {}
        self.geometry = None

    @property
    def loaded(self):
        return self.geometry is not None and len(self.programs) == len(ShaderVariant)

    def load(self):
        """Compile both programs and upload the triangle.

        All three source files are checked before anything is compiled. If
        any step fails, whatever was already created is disposed before the
        error propagates.

        Raises
        ------
        MissingResourceError
            If a shader source file is missing.
        CompileError
            If a shader fails to compile or link.
        PreconditionViolation
            If resources are already loaded and not yet disposed.
        """
        if self.programs or self.geometry is not None:
            raise PreconditionViolation("Resources are already loaded; dispose() them before loading again.")
        vertex_path, basic_path, uniform_path = get_shader_paths(self.shader_dir)
        check_shader_files(vertex_path, basic_path, uniform_path)

        try:
            for variant, fragment_path in ((ShaderVariant.BASIC, basic_path),
                                           (ShaderVariant.UNIFORM, uniform_path)):
                vertex_source, fragment_source = load_shader_sources(vertex_path, fragment_path)
                self.programs[variant] = ShaderProgram.compile_and_link(
                    self._ctx, vertex_source, fragment_source
                )
                logger.debug("Built %s from %s", variant.label, fragment_path)
            self.geometry = create_triangle(self._ctx)
        except Exception as exc:
            logger.error("Error creating shaders: %s", exc)
            self.dispose()
            raise
        return self

    def program(self, variant):
        """Return the :class:`ShaderProgram` for a :class:`ShaderVariant`."""
        return self.programs[ShaderVariant(variant)]

    def dispose(self):
        """Dispose programs, then geometry. Safe to call repeatedly."""
        for variant in list(self.programs):
            self.programs.pop(variant).dispose()
        if self.geometry is not None:
            geometry, self.geometry = self.geometry, None
            geometry.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
