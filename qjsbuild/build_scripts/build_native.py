#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_native.py
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
QuickJS native library build for a single target platform.

This script drives the whole build:
1. Captures environment variables and local.properties
2. Locates ninja (and cmake, when the first command runs)
3. Resolves the target JDK for JNI builds
4. Runs the CMake configure step, then the CMake build step
5. Copies the built library to the output directory, if one was given

Every step is fatal on failure. Nothing is spawned before the argument lists
for both steps have been computed, so configuration problems never leave a
half-configured build directory behind.

Requirements:
- CMake 3.10 or later
- Ninja (Windows, Linux and macOS targets)
- Xcode (iOS targets)
- A target JDK for JNI builds (JAVA_HOME_<OS>_<ARCH>)

Output:
    - Build tree: <native dir>/build/<platform>/
    - Staged library: <output dir>/lib<name>[_<platform>].<ext>
"""

import os
import time
from typing import Optional

from qjsbuild.build_scripts.artifact import ArtifactLocation, ArtifactStager
from qjsbuild.build_scripts.build_utils import DEFAULT_LIBRARY_NAME, BuildEnvironment
from qjsbuild.build_scripts.cmake_args import CMAKE, BuildConfig, CMakeArgs
from qjsbuild.build_scripts.errors import ProcessExecutionError
from qjsbuild.build_scripts.java_home import JavaHomeResolver
from qjsbuild.build_scripts.toolchain import (
    Tool,
    ToolchainLocator,
    ToolchainPath,
    missing_tool_error,
)
from qjsbuild.utils.cmd.cmd_util import CommandRunner, SubprocessRunner


class BuildInvoker:
    """
    Runs build commands in the directory holding CMakeLists.txt.

    A leading 'cmake' token is replaced by the located cmake executable.
    """

    def __init__(self, working_dir, locator: ToolchainLocator, runner: CommandRunner = None):
        self.working_dir = working_dir
        self.locator = locator
        self.runner = runner or SubprocessRunner()
        self._cmake: Optional[ToolchainPath] = None

    def cmake(self) -> ToolchainPath:
        if self._cmake is None:
            self._cmake = self.locator.require(Tool.CMAKE)
        return self._cmake

    def run(self, *tokens):
        command = list(tokens)
        if command and command[0] == CMAKE:
            command[0] = self.cmake().path
        print(f"+ {' '.join(command)}")
        try:
            ret = self.runner.run(self.working_dir, command)
        except OSError as e:
            print("!!!!!!!!!!!build fail!!!!!!!!!!!!!!!")
            raise ProcessExecutionError(command, reason=e) from e
        if ret != 0:
            print("!!!!!!!!!!!build fail!!!!!!!!!!!!!!!")
            raise ProcessExecutionError(command, ret)


def build_quickjs_native_library(
    cmake_file,
    config: BuildConfig,
    project_dir=None,
    library_name=DEFAULT_LIBRARY_NAME,
    env: BuildEnvironment = None,
    runner: CommandRunner = None,
    locator: ToolchainLocator = None,
) -> Optional[ArtifactLocation]:
    """
    Build the native library for one platform.

    Args:
        cmake_file: Path of the CMakeLists.txt to configure
        config: Platform, link type, build type and staging options
        project_dir: Project root holding local.properties (default: current directory)
        library_name: Library name without the 'lib' prefix
        env: Environment snapshot (default: captured from this process)
        runner: Command runner (default: child processes)
        locator: Tool locator (default: searches env, well-known paths and PATH)

    Returns:
        ArtifactLocation of the staged library, or None if no output dir was given

    Raises:
        QjsBuildError: any failure, the build is aborted
    """
    before_time = time.time()
    print(
        f"==================build_quickjs ({config.link_type.value}, "
        f"target: {config.platform})========================"
    )

    project_dir = os.path.abspath(project_dir or os.getcwd())
    if env is None:
        env = BuildEnvironment.capture(project_dir)
    native_dir = os.path.dirname(os.path.abspath(cmake_file))

    if locator is None:
        locator = ToolchainLocator(env)
    ninja = locator.locate(Tool.NINJA)
    java_homes = JavaHomeResolver(env) if config.with_jni else None

    cmake_args = CMakeArgs(config, ninja=ninja, java_homes=java_homes)
    configure_command = cmake_args.configure_command()
    build_command = cmake_args.build_command()

    if cmake_args.requires_ninja and ninja is None:
        raise missing_tool_error(Tool.NINJA)

    stager = ArtifactStager(native_dir, library_name)
    if config.output_dir is not None:
        # fail on unstageable combinations before spending time on the build
        stager.locate(config, config.output_dir)

    invoker = BuildInvoker(native_dir, locator, runner)
    # Generate build files
    invoker.run(*configure_command)
    # Build
    invoker.run(*build_command)

    location = None
    if config.output_dir is not None:
        location = stager.stage(config, config.output_dir)
        print("==================Output========================")
        print(location.destination)

    after_time = time.time()
    print(f"use time: {int(after_time - before_time)} s")
    return location
