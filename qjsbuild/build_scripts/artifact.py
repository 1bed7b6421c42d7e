#!/usr/bin/env python3
# -- coding: utf-8 --
#
# artifact.py
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
Copies the built library out of the CMake build tree.

Output locations, relative to the platform build directory:
- Shared: lib<name>.dll / lib<name>.so / lib<name>.dylib
- Static, desktop: lib<name>.a
- Static, iOS device: <BuildType>-iphoneos/lib<name>.a
- Static, iOS x64 simulator: <BuildType>-iphonesimulator/lib<name>.a
- Static, iOS aarch64 simulator: <BuildType>/lib<name>.a

The staged file is <output_dir>/lib<name>.<ext>, or lib<name>_<platform>.<ext>
when several platforms are staged into the same directory.
"""

import os
import shutil
from dataclasses import dataclass

from qjsbuild.build_scripts.build_utils import DEFAULT_LIBRARY_NAME
from qjsbuild.build_scripts.cmake_args import BuildConfig
from qjsbuild.build_scripts.errors import ArtifactMissingError, UnsupportedPlatformError
from qjsbuild.build_scripts.platforms import OsFamily, Platform

# iOS has no shared library build
SHARED_EXTENSIONS = {
    OsFamily.WINDOWS: "dll",
    OsFamily.LINUX: "so",
    OsFamily.MACOS: "dylib",
    OsFamily.IOS: None,
}

STATIC_EXTENSION = "a"

# Xcode places static libraries in per-configuration directories. The aarch64
# simulator directory carries no SDK suffix, unlike the other two.
STATIC_SUBDIRS = {
    Platform.windows_x64: "",
    Platform.linux_x64: "",
    Platform.linux_aarch64: "",
    Platform.macos_x64: "",
    Platform.macos_aarch64: "",
    Platform.ios_aarch64: "{build_type}-iphoneos/",
    Platform.ios_x64: "{build_type}-iphonesimulator/",
    Platform.ios_simulator_aarch64: "{build_type}/",
}


@dataclass(frozen=True)
class ArtifactLocation:
    source: str
    destination: str


def library_extension(config: BuildConfig) -> str:
    if not config.shared:
        return STATIC_EXTENSION
    ext = SHARED_EXTENSIONS[config.platform.os_family]
    if ext is None:
        raise UnsupportedPlatformError(f"Unsupported platform: {config.platform}")
    return ext


def library_subdir(config: BuildConfig) -> str:
    if config.shared:
        return ""
    return STATIC_SUBDIRS[config.platform].format(build_type=config.build_type)


class ArtifactStager:
    """
    Args:
        native_dir: Directory holding CMakeLists.txt, the build directories live below it
        library_name: Library name without the 'lib' prefix
    """

    def __init__(self, native_dir, library_name=DEFAULT_LIBRARY_NAME):
        self.native_dir = native_dir
        self.library_name = library_name

    def destination_name(self, config: BuildConfig) -> str:
        ext = library_extension(config)
        if config.with_platform_suffix:
            return f"lib{self.library_name}_{config.platform}.{ext}"
        return f"lib{self.library_name}.{ext}"

    def locate(self, config: BuildConfig, output_dir) -> ArtifactLocation:
        ext = library_extension(config)
        source = os.path.join(
            self.native_dir,
            config.build_dir,
            f"{library_subdir(config)}lib{self.library_name}.{ext}",
        )
        return ArtifactLocation(
            source=os.path.normpath(source),
            destination=os.path.join(output_dir, self.destination_name(config)),
        )

    def stage(self, config: BuildConfig, output_dir) -> ArtifactLocation:
        """
        Copy the built library into output_dir, overwriting any previous copy.

        Raises:
            ArtifactMissingError: the library was not built, or output_dir
                cannot be created or written to
        """
        location = self.locate(config, output_dir)
        if not os.path.isfile(location.source):
            raise ArtifactMissingError(
                f"Built library not found: {location.source}",
                hint="The build finished without producing the expected library.",
            )

        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise ArtifactMissingError(
                f"Failed to create library output dir: {output_dir} ({e})"
            ) from e

        print(f"Copying built QuickJS {config.link_type.value} library to {output_dir}")
        try:
            shutil.copyfile(location.source, location.destination)
        except OSError as e:
            raise ArtifactMissingError(
                f"Failed to copy {location.source} to {location.destination} ({e})"
            ) from e
        return location
