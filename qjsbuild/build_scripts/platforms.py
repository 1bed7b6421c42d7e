#!/usr/bin/env python3
# -- coding: utf-8 --
#
# platforms.py
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
Catalog of target platforms the QuickJS native library can be built for.

Each platform knows its operating-system family, its CPU architecture and the
CMake generator it requires:
- Desktop platforms (Windows, Linux, macOS) use the Ninja generator
- iOS platforms (device and both simulators) use the Xcode generator

The string value of every member is its platform identity. It is used as the
build directory name, the TARGET_PLATFORM CMake value and the staged file suffix.
"""

from enum import Enum

from qjsbuild.build_scripts.errors import UnsupportedPlatformError


class OsFamily(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    IOS = "ios"


class Arch(Enum):
    X64 = "x64"
    AARCH64 = "aarch64"


class Generator(Enum):
    """CMake generators, with the single-token flag passed to the configure step."""

    NINJA = "-GNinja"
    XCODE = "-GXcode"

    @property
    def flag(self) -> str:
        return self.value


class Platform(Enum):
    windows_x64 = ("windows_x64", OsFamily.WINDOWS, Arch.X64)
    linux_x64 = ("linux_x64", OsFamily.LINUX, Arch.X64)
    linux_aarch64 = ("linux_aarch64", OsFamily.LINUX, Arch.AARCH64)
    macos_x64 = ("macos_x64", OsFamily.MACOS, Arch.X64)
    macos_aarch64 = ("macos_aarch64", OsFamily.MACOS, Arch.AARCH64)
    # iOS device
    ios_aarch64 = ("ios_aarch64", OsFamily.IOS, Arch.AARCH64)
    # iOS simulator on Intel hosts
    ios_x64 = ("ios_x64", OsFamily.IOS, Arch.X64)
    ios_simulator_aarch64 = ("ios_simulator_aarch64", OsFamily.IOS, Arch.AARCH64)

    def __init__(self, identity, os_family, arch):
        self.identity = identity
        self.os_family = os_family
        self.arch = arch

    def __str__(self):
        return self.identity

    @property
    def os_name(self) -> str:
        return self.os_family.value

    @property
    def is_ios(self) -> bool:
        return self.os_family is OsFamily.IOS

    @property
    def generator(self) -> Generator:
        return Generator.XCODE if self.is_ios else Generator.NINJA

    @property
    def requires_ninja(self) -> bool:
        return self.generator is Generator.NINJA

    @classmethod
    def names(cls) -> list:
        return [p.identity for p in cls]

    @classmethod
    def from_name(cls, name: str) -> "Platform":
        """Look up a platform by its identity, e.g. 'macos_aarch64'."""
        normalized = name.strip().lower()
        for p in cls:
            if p.identity == normalized:
                return p
        raise UnsupportedPlatformError(
            f"Unsupported platform: '{name}'",
            hint=f"Valid platforms: {', '.join(cls.names())}",
        )
