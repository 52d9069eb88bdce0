import argparse

from .. import sys_info


def run(argv=None):
    """Report the GLFW and PyOpenGL setup and which shader files are present."""
    parser = argparse.ArgumentParser(
        prog=f"{__package__.split('.')[0]}-sys_info",
        description="Print the OpenGL runtime setup without opening a window.",
    )
    parser.add_argument(
        "--shader-dir",
        dest="shader_dir",
        default=None,
        help="check this directory instead of the bundled shader sources",
    )
    args = parser.parse_args(argv)

    sys_info(shader_dir=args.shader_dir)
