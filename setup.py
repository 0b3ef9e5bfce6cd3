"""
Build hook for the factor-pushing wheel.

The wheel is meant to be headless: it ships the engine, rendering and
CLI (--print / --snap), which only need numpy, pydantic and Pillow. The
pygame side panel and window are left out. To get the interactive viewer,
install from a checkout with: pip install -e .[viewer]
"""

from setuptools import setup
from setuptools.command.build_py import build_py


# Modules that import pygame at import time
PYGAME_MODULES = frozenset({"viewer", "controls"})


class HeadlessBuildPy(build_py):
    """build_py that drops the pygame-only modules from factor_pushing."""

    def find_package_modules(self, package, package_dir):
        found = super().find_package_modules(package, package_dir)
        if package != "factor_pushing":
            return found
        return [entry for entry in found if entry[1] not in PYGAME_MODULES]


setup(cmdclass={"build_py": HeadlessBuildPy})
