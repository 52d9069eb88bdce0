"""Exceptions raised by shaderswap.

Load-time failures (:class:`CompileError`, :class:`MissingResourceError`)
are fatal for the demo and propagate to the command-line entry point.
:class:`PreconditionViolation` signals a programming error such as using a
program after it was disposed.

A uniform that cannot be found is *not* an error; see
:meth:`shaderswap.gl.program.ShaderProgram.uniform_location`.
"""

from .utils.types import ShaderStage


class ShaderSwapError(Exception):
    """Base class for all shaderswap errors."""


class CompileError(ShaderSwapError):
    """A shader stage failed to compile or the program failed to link.

    Parameters
    ----------
    stage : ShaderStage
        The stage that failed.
    log : str
        The driver's info log, verbatim.
    """

    def __init__(self, stage, log):
        self.stage = ShaderStage(stage)
        self.log = log
        if self.stage is ShaderStage.LINK:
            message = f"shader program link failed: {log}"
        else:
            message = f"{self.stage.value} shader compilation failed: {log}"
        super().__init__(message)


class MissingResourceError(ShaderSwapError, FileNotFoundError):
    """One or more required shader source files do not exist.

    Parameters
    ----------
    paths : sequence of str or os.PathLike
        Every missing file, so the user can fix them in one go.
    """

    def __init__(self, paths):
        self.paths = tuple(str(p) for p in paths)
        super().__init__("Shader files not found: " + ", ".join(self.paths))


class PreconditionViolation(ShaderSwapError, RuntimeError):
    """A call was made in a state where it is not allowed."""
