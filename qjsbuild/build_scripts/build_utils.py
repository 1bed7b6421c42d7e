#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_utils.py
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
Shared utilities for the native library build pipeline.

This module provides:
- Loading of the project configuration file (QJSBUILD.toml)
- A reader for Java-style key/value property files (local.properties)
- BuildEnvironment, the snapshot of environment variables and local
  properties taken once at the start of every build invocation
- Host platform helpers
"""

import os
import re
import platform
import sys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

if sys.version_info >= (3, 11, 0, "alpha", 7):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILE_NAME = "QJSBUILD.toml"
LOCAL_PROPERTIES_FILE_NAME = "local.properties"

DEFAULT_CMAKE_FILE = "native/CMakeLists.txt"
DEFAULT_LIBRARY_NAME = "quickjs"


@dataclass(frozen=True)
class ProjectConfig:
    """Values read from QJSBUILD.toml, with defaults for anything missing."""

    project_dir: str
    name: str = "quickjs"
    cmake_file: str = DEFAULT_CMAKE_FILE
    library_name: str = DEFAULT_LIBRARY_NAME
    output_dir: Optional[str] = None

    @property
    def cmake_file_path(self) -> str:
        if os.path.isabs(self.cmake_file):
            return self.cmake_file
        return os.path.join(self.project_dir, self.cmake_file)

    @property
    def output_dir_path(self) -> Optional[str]:
        if self.output_dir is None:
            return None
        return os.path.join(self.project_dir, self.output_dir)


def load_project_config(project_dir=None) -> ProjectConfig:
    """
    Load configuration from QJSBUILD.toml in the project directory.

    Falls back to default values if the file is not found or cannot be parsed.

    Args:
        project_dir: Project root, defaults to the current working directory

    Returns:
        ProjectConfig: the loaded configuration
    """
    project_dir = os.path.abspath(project_dir or os.getcwd())
    config_file = os.path.join(project_dir, CONFIG_FILE_NAME)

    if not os.path.isfile(config_file):
        print(f"   ⚠️  Warning: {CONFIG_FILE_NAME} not found at {config_file}")
        print("   ⚠️  Using default configuration values")
        return ProjectConfig(project_dir=project_dir)

    try:
        with open(config_file, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"   ⚠️  Error reading {CONFIG_FILE_NAME}: {e}")
        print("   ⚠️  Using default configuration values")
        return ProjectConfig(project_dir=project_dir)

    project = toml_data.get("project", {})
    native = toml_data.get("native", {})
    return ProjectConfig(
        project_dir=project_dir,
        name=project.get("name", "quickjs"),
        cmake_file=native.get("cmake_file", DEFAULT_CMAKE_FILE),
        library_name=native.get("library_name", DEFAULT_LIBRARY_NAME),
        output_dir=native.get("output_dir"),
    )


def read_properties(path) -> Dict[str, str]:
    """
    Read a Java-style .properties file.

    Supports 'key=value', 'key: value' and 'key value' entries, '#' and '!'
    comment lines, backslash line continuations and the usual escapes
    (\\\\, \\:, \\=, \\t, ...). Unicode escapes are not decoded.

    Args:
        path: Path of the properties file

    Returns:
        dict: key to value mapping, empty if the file does not exist
    """
    props = {}
    if not os.path.isfile(path):
        return props

    with open(path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    logical = ""
    for raw in lines:
        line = raw.lstrip()
        if not logical and (not line or line[0] in "#!"):
            continue
        # an odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            logical += line[:-1]
            continue
        logical += line
        key, value = _split_property(logical)
        props[_unescape(key)] = _unescape(value)
        logical = ""

    if logical:
        key, value = _split_property(logical)
        props[_unescape(key)] = _unescape(value)
    return props


_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _unescape(text):
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)


def _split_property(line):
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in "=: \t":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t")
    return key, rest


@dataclass(frozen=True)
class BuildEnvironment:
    """
    Immutable view of everything the build reads from its surroundings.

    Captured once per invocation so that tool discovery and SDK home lookup
    never query os.environ in the middle of a build.
    """

    environ: Mapping[str, str] = field(default_factory=dict)
    local_properties: Mapping[str, str] = field(default_factory=dict)
    local_properties_path: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "environ", MappingProxyType(dict(self.environ)))
        object.__setattr__(
            self, "local_properties", MappingProxyType(dict(self.local_properties))
        )

    @classmethod
    def capture(cls, project_dir, environ=None) -> "BuildEnvironment":
        """Snapshot the process environment and <project_dir>/local.properties."""
        props_path = os.path.join(project_dir, LOCAL_PROPERTIES_FILE_NAME)
        return cls(
            environ=dict(os.environ if environ is None else environ),
            local_properties=read_properties(props_path),
            local_properties_path=props_path,
        )

    def getenv(self, key, default=None):
        return self.environ.get(key, default)

    @property
    def path_dirs(self) -> list:
        path = self.environ.get("PATH", "")
        return [d for d in path.split(os.pathsep) if d]


def system_is_windows():
    """Check if current platform is Windows."""
    return platform.system().lower() == "windows"


def system_is_macos():
    """Check if current platform is macOS/Darwin."""
    return platform.system().lower() == "darwin"
