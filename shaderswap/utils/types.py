"""Contains the types used in shaderswap.

This module defines small enumeration types shared by the GL layer and the
frame driver.

Classes
-------
ShaderStage
    Pipeline stage a shader compilation error belongs to.
ShaderVariant
    The selectable shader programs of the demo.
"""

import enum


class ShaderStage(enum.Enum):
    """Stage of program construction that produced a diagnostic.

    Attributes
    ----------
    VERTEX : str
        Vertex shader compilation.
    FRAGMENT : str
        Fragment shader compilation.
    LINK : str
        Program linking.
    """
    VERTEX = "vertex"
    FRAGMENT = "fragment"
    LINK = "link"


class ShaderVariant(enum.Enum):
    """Shader programs the frame driver can toggle between.

    The values double as the index into the driver's fixed program tuple.

    Attributes
    ----------
    BASIC : int
        Vertex colors only, no uniforms.
    UNIFORM : int
        Vertex colors modulated by the ``uTime`` and ``uTint`` uniforms.
    """
    BASIC = 0
    UNIFORM = 1

    @property
    def label(self):
        return f"{self.name.capitalize()} Shader"
