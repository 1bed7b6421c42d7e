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

import argparse

from qjsbuild.build_scripts.build_native import build_quickjs_native_library
from qjsbuild.build_scripts.build_utils import load_project_config
from qjsbuild.build_scripts.cmake_args import BuildConfig, LinkType
from qjsbuild.build_scripts.platforms import Platform
from qjsbuild.utils.context.command import CliCommand
from qjsbuild.utils.context.context import CliContext
from qjsbuild.utils.context.namespace import CliNameSpace


class Build(CliCommand):
    def description(self) -> str:
        return """Build the QuickJS native library for specific platforms.

SUPPORTED PLATFORMS:
    windows_x64             Windows x64 (Ninja)
    linux_x64               Linux x64 (Ninja)
    linux_aarch64           Linux aarch64 (Ninja)
    macos_x64               macOS x64 (Ninja)
    macos_aarch64           macOS aarch64 (Ninja)
    ios_aarch64             iOS device (Xcode, static only)
    ios_x64                 iOS simulator on x64 (Xcode, static only)
    ios_simulator_aarch64   iOS simulator on aarch64 (Xcode, static only)

EXAMPLES:
    # Debug shared library for Linux x64
    qjsbuild build linux_x64

    # Release static library with JNI bindings for macOS aarch64
    qjsbuild build macos_aarch64 --release --jni --link-type static

    # Build all iOS variants into one directory
    qjsbuild build ios_aarch64 ios_x64 ios_simulator_aarch64 \\
        --link-type static --output-dir out/ios --platform-suffix

Several platforms are built one after another, each in build/<platform>.

ENVIRONMENT VARIABLES:
    CMAKE_PATH              Path of the cmake executable
    NINJA_PATH              Path of the ninja executable
    JAVA_HOME_WINDOWS_X64   Target JDK for JNI builds (also read from local.properties)
    JAVA_HOME_LINUX_X64
    JAVA_HOME_LINUX_AARCH64
    JAVA_HOME_MACOS_X64
    JAVA_HOME_MACOS_AARCH64
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="qjsbuild build",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "platforms",
            metavar="platform",
            type=str,
            nargs="+",
            choices=Platform.names(),
            help=f"target platform, one of {Platform.names()}",
        )
        parser.add_argument(
            "--link-type",
            choices=[t.value for t in LinkType],
            default=LinkType.SHARED.value,
            help="Library link type: shared (.so/.dll/.dylib, default) or static (.a)",
        )
        parser.add_argument(
            "--jni",
            action="store_true",
            help="build with the JNI binding layer (needs JAVA_HOME_<OS>_<ARCH>)",
        )
        parser.add_argument(
            "--release",
            action="store_true",
            help="build MinSizeRel instead of Debug",
        )
        parser.add_argument(
            "--output-dir",
            type=str,
            default=None,
            help="copy the built library into this directory",
        )
        parser.add_argument(
            "--platform-suffix",
            action="store_true",
            help="name the copied library lib<name>_<platform>.<ext>",
        )
        parser.add_argument(
            "--project-dir",
            type=str,
            default=None,
            help="project root holding QJSBUILD.toml and local.properties (default: cwd)",
        )
        parser.add_argument(
            "--cmake-file",
            type=str,
            default=None,
            help="CMakeLists.txt to build (default: from QJSBUILD.toml, or native/CMakeLists.txt)",
        )
        return parser.parse_args(argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace):
        project_dir = args.project_dir or context.project_dir
        project = load_project_config(project_dir)
        cmake_file = args.cmake_file or project.cmake_file_path
        output_dir = args.output_dir or project.output_dir_path

        platforms = [Platform.from_name(p) for p in args.platforms]
        if output_dir and len(platforms) > 1 and not args.platform_suffix:
            print(
                "WARNING: building several platforms into one output dir without "
                "--platform-suffix, later builds overwrite earlier ones"
            )

        for platform in platforms:
            config = BuildConfig(
                platform=platform,
                link_type=LinkType(args.link_type),
                release=args.release,
                with_jni=args.jni,
                output_dir=output_dir,
                with_platform_suffix=args.platform_suffix,
            )
            build_quickjs_native_library(
                cmake_file,
                config,
                project_dir=project.project_dir,
                library_name=project.library_name,
            )
