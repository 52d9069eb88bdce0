#!/usr/bin/env python3
"""Interactive shader-toggle demo.

Opens an OpenGL 3.3 core window and draws a single vertex-colored
triangle. Two shader programs are compiled at startup from the bundled
GLSL sources (or from ``--shader-dir``):

* ``basic``: ``basic.vert`` + ``basic.frag``, plain vertex colors.
* ``uniform``: ``basic.vert`` + ``uniform.frag``, colors pulsed by the
  ``uTime`` uniform and tinted by ``uTint``.

Usage::

    shaderswap
    shaderswap --width 1024 --height 768 --title "Triangle"
    shaderswap --shader-dir ./my_shaders --verbose

Keys: SPACE switches shaders, ESC quits.

A shader that fails to compile or link, or a missing shader file, is fatal:
the driver log is printed and the program exits with status 1 before the
render loop starts.
"""

import argparse
import logging
import os
import sys

if __name__ == "__main__" and __package__ is None:
    os.execv(sys.executable, [sys.executable, "-m", "shaderswap.cli.shaderswap"] + sys.argv[1:])

from .._version import __version__
from ..engine import Engine
from ..errors import CompileError, MissingResourceError
from ..gl import GameWindow

# Module logger
logger = logging.getLogger(__name__)


def run(argv=None):
    """Command-line entry point for the shader-toggle demo.

    Parameters
    ----------
    argv : list of str or None, optional
        Arguments to parse instead of ``sys.argv[1:]``.

    Raises
    ------
    SystemExit
        With status 1 when the window cannot be created or the shaders
        cannot be loaded, and with status 2 for invalid arguments.
    """
    parser = argparse.ArgumentParser(
        prog="shaderswap",
        description=(
            "Draw a triangle with two switchable GLSL shader programs. "
            "SPACE switches shaders, ESC quits."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--width", type=int, default=800,
                        help="Window width in pixels (default: 800).")
    parser.add_argument("--height", type=int, default=600,
                        help="Window height in pixels (default: 600).")
    parser.add_argument("--title", type=str, default="Intro to OpenGL",
                        help="Window title (default: 'Intro to OpenGL').")
    parser.add_argument(
        "--shader-dir", dest="shader_dir", type=str, default=None,
        help="Directory containing basic.vert, basic.frag and uniform.frag "
             "(default: the sources bundled with shaderswap).",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every shader bind and uniform write.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        window = GameWindow.create(args.width, args.height, args.title)
    except ValueError as e:
        parser.error(str(e))
    except RuntimeError as e:
        logger.error("%s", e)
        sys.exit(1)

    try:
        with Engine(window, shader_dir=args.shader_dir) as engine:
            engine.run()
    except (CompileError, MissingResourceError) as e:
        logger.error("Startup failed: %s", e)
        sys.exit(1)
    finally:
        window.terminate()


if __name__ == "__main__":
    run()
