#!/usr/bin/env python3
# -- coding: utf-8 --
#
# cmake_args.py
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
CMake argument synthesis for the configure and build steps.

Configure step:
    cmake -B build/<platform> -DCMAKE_BUILD_TYPE=<type> -DTARGET_PLATFORM=<platform>
          -DBUILD_WITH_JNI=<ON|OFF> -DLIBRARY_TYPE=<shared|static>
          <generator> [-DPLATFORM_JAVA_HOME=<jdk>] [-DCMAKE_MAKE_PROGRAM=<ninja>] ./

Build step:
    cmake --build build/<platform> [-- -sdk iphonesimulator]

Every platform builds into its own directory, so several platforms can be
built from the same source tree without sharing any build state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from qjsbuild.build_scripts.java_home import JavaHomeResolver, java_home_key
from qjsbuild.build_scripts.platforms import Generator, Platform
from qjsbuild.build_scripts.toolchain import ToolchainPath

CMAKE = "cmake"

RELEASE_BUILD_TYPE = "MinSizeRel"
DEBUG_BUILD_TYPE = "Debug"

# Only the x64 simulator needs the SDK picked explicitly; the device and the
# aarch64 simulator builds go with xcodebuild's default selection.
BUILD_SDK_ARGS = {
    Platform.windows_x64: (),
    Platform.linux_x64: (),
    Platform.linux_aarch64: (),
    Platform.macos_x64: (),
    Platform.macos_aarch64: (),
    Platform.ios_aarch64: (),
    Platform.ios_x64: ("--", "-sdk", "iphonesimulator"),
    Platform.ios_simulator_aarch64: (),
}


class LinkType(Enum):
    SHARED = "shared"
    STATIC = "static"


@dataclass(frozen=True)
class BuildConfig:
    platform: Platform
    link_type: LinkType = LinkType.SHARED
    release: bool = False
    with_jni: bool = False
    output_dir: Optional[str] = None
    with_platform_suffix: bool = False

    @property
    def shared(self) -> bool:
        return self.link_type is LinkType.SHARED

    @property
    def build_type(self) -> str:
        return RELEASE_BUILD_TYPE if self.release else DEBUG_BUILD_TYPE

    @property
    def build_dir(self) -> str:
        """Build directory, relative to the directory holding CMakeLists.txt."""
        return f"build/{self.platform}"


def java_home_arg(home: str) -> str:
    return f"-DPLATFORM_JAVA_HOME={home}"


def make_program_arg(ninja: ToolchainPath) -> str:
    return f"-DCMAKE_MAKE_PROGRAM={ninja.path}"


class CMakeArgs:
    """
    Builds the argument lists for one build invocation.

    Args:
        config: What to build
        ninja: Located ninja, or None if it could not be found
        java_homes: Resolver for the target JDK, required when config.with_jni is set
    """

    def __init__(
        self,
        config: BuildConfig,
        ninja: Optional[ToolchainPath] = None,
        java_homes: Optional[JavaHomeResolver] = None,
    ):
        self.config = config
        self.ninja = ninja
        self.java_homes = java_homes

    def common_args(self) -> Tuple[str, ...]:
        c = self.config
        return (
            "-B",
            c.build_dir,
            f"-DCMAKE_BUILD_TYPE={c.build_type}",
            f"-DTARGET_PLATFORM={c.platform}",
            f"-DBUILD_WITH_JNI={'ON' if c.with_jni else 'OFF'}",
            f"-DLIBRARY_TYPE={c.link_type.value}",
        )

    def generator_args(self) -> Tuple[str, ...]:
        generator = self.config.platform.generator
        if generator is Generator.XCODE:
            return (generator.flag,)
        if self.ninja is not None:
            return (generator.flag, make_program_arg(self.ninja))
        return (generator.flag,)

    def jni_args(self) -> Tuple[str, ...]:
        if not self.config.with_jni:
            return ()
        # fails for platforms without a JDK key before anything is resolved
        java_home_key(self.config.platform)
        if self.java_homes is None:
            raise ValueError("a JavaHomeResolver is required for JNI builds")
        return (java_home_arg(self.java_homes.resolve(self.config.platform)),)

    def configure_args(self) -> Tuple[str, ...]:
        generator = self.generator_args()
        # the generator flag comes first, the optional make program pin last
        return self.common_args() + generator[:1] + self.jni_args() + generator[1:]

    def configure_command(self) -> Tuple[str, ...]:
        return (CMAKE,) + self.configure_args() + ("./",)

    def build_args(self) -> Tuple[str, ...]:
        return (self.config.build_dir,) + BUILD_SDK_ARGS[self.config.platform]

    def build_command(self) -> Tuple[str, ...]:
        return (CMAKE, "--build") + self.build_args()

    @property
    def requires_ninja(self) -> bool:
        return self.config.platform.generator is Generator.NINJA
