#!/usr/bin/env python3
# -- coding: utf-8 --
#
# toolchain.py
# qjsbuild
#
# Copyright 2024 qjsbuild Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
Discovery of the external build tools (cmake, ninja).

Search order, first match wins:
1. The tool's override environment variable (CMAKE_PATH, NINJA_PATH),
   when it names an existing file system entry
2. Well-known installation paths (Homebrew, /usr/local, system, Windows installer)
3. Every directory of PATH, looking for an executable named after the tool
   (with each PATHEXT extension on Windows)

Whether a missing tool is fatal is decided by the caller: cmake is always
required, ninja only for platforms built with the Ninja generator.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from qjsbuild.build_scripts.build_utils import BuildEnvironment, system_is_windows
from qjsbuild.build_scripts.errors import ToolchainMissingError


class Tool(Enum):
    CMAKE = "cmake"
    NINJA = "ninja"

    @property
    def env_var(self) -> str:
        return f"{self.value.upper()}_PATH"


WELL_KNOWN_PATHS = {
    Tool.CMAKE: [
        "/opt/homebrew/bin/cmake",
        "/usr/local/bin/cmake",
        "/usr/bin/cmake",
        "C:\\Program Files\\CMake\\bin\\cmake.exe",
    ],
    Tool.NINJA: [
        "/opt/homebrew/bin/ninja",
        "/usr/local/bin/ninja",
        "/usr/bin/ninja",
    ],
}

DEFAULT_PATHEXT = ".COM;.EXE;.BAT;.CMD"

INSTALL_INSTRUCTIONS = {
    Tool.CMAKE: """Cannot find cmake executable. Please install cmake:
- macOS: brew install cmake
- Linux: sudo apt-get install cmake (or use your package manager)
- Windows: Download from https://cmake.org/download/

If cmake is already installed, make sure it's in your PATH or set CMAKE_PATH environment variable.""",
    Tool.NINJA: """Cannot find ninja executable. Ninja is required for building on this platform.
Please install ninja:
- macOS: brew install ninja
- Linux: sudo apt-get install ninja-build (or use your package manager)
- Windows: Download from https://github.com/ninja-build/ninja/releases

If ninja is already installed, make sure it's in your PATH or set NINJA_PATH environment variable.""",
}


@dataclass(frozen=True)
class ToolchainPath:
    tool: Tool
    path: str
    # one of "env", "well-known", "PATH"
    source: str

    def __str__(self):
        return self.path


class ToolchainLocator:
    """Finds cmake and ninja for one build invocation. Results are not cached."""

    def __init__(self, env: BuildEnvironment, well_known_paths=None, windows=None):
        self.env = env
        self.well_known_paths = (
            WELL_KNOWN_PATHS if well_known_paths is None else well_known_paths
        )
        self.windows = system_is_windows() if windows is None else windows

    def executable_names(self, tool: Tool) -> list:
        """File names a PATH entry may hold the tool under (PATHEXT on Windows)."""
        if not self.windows:
            return [tool.value]
        pathext = self.env.getenv("PATHEXT") or DEFAULT_PATHEXT
        exts = [ext.lower() for ext in pathext.split(";") if ext]
        return [tool.value] + [tool.value + ext for ext in exts]

    def locate(self, tool: Tool) -> Optional[ToolchainPath]:
        """
        Find the absolute path of a tool.

        Args:
            tool: The tool to look for

        Returns:
            ToolchainPath, or None when no search strategy finds it
        """
        env_path = self.env.getenv(tool.env_var)
        if env_path and os.path.exists(env_path):
            return ToolchainPath(tool, os.path.abspath(env_path), "env")

        for path in self.well_known_paths.get(tool, []):
            if os.path.exists(path):
                return ToolchainPath(tool, os.path.abspath(path), "well-known")

        for directory in self.env.path_dirs:
            for name in self.executable_names(tool):
                candidate = os.path.join(directory, name)
                if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
                    return ToolchainPath(tool, os.path.abspath(candidate), "PATH")

        return None

    def require(self, tool: Tool) -> ToolchainPath:
        """Like locate(), but raise ToolchainMissingError with install instructions."""
        found = self.locate(tool)
        if found is None:
            raise missing_tool_error(tool)
        return found


def missing_tool_error(tool: Tool) -> ToolchainMissingError:
    message, _, hint = INSTALL_INSTRUCTIONS[tool].partition("\n")
    return ToolchainMissingError(message, hint=hint)
