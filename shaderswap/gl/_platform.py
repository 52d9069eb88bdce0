"""Bootstrap PyOpenGL platform selection; must be imported first.

Imported unconditionally at the top of gl/__init__.py before any other
OpenGL symbol. Sets PYOPENGL_PLATFORM=egl when running headless on Linux
so that PyOpenGL does not try to resolve GLX entry points without a
display server.

If the user has already set PYOPENGL_PLATFORM that value is always
respected.
"""
import os
import sys

if "PYOPENGL_PLATFORM" not in os.environ and sys.platform == "linux":
    if not os.environ.get("DISPLAY") and not os.environ.get("WAYLAND_DISPLAY"):
        os.environ["PYOPENGL_PLATFORM"] = "egl"
