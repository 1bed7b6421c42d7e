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

import sys
import argparse

from qjsbuild.build_scripts.build_utils import BuildEnvironment
from qjsbuild.build_scripts.java_home import JAVA_HOME_KEYS, JavaHomeResolver
from qjsbuild.build_scripts.platforms import Platform
from qjsbuild.build_scripts.toolchain import Tool, ToolchainLocator
from qjsbuild.utils.context.command import CliCommand
from qjsbuild.utils.context.context import CliContext
from qjsbuild.utils.context.namespace import CliNameSpace


class Check(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to check the build toolchain and JDK locations.

        Examples:
            qjsbuild check                  # Check everything
            qjsbuild check linux_x64        # Check what a linux_x64 build needs
            qjsbuild check ios_x64          # Check what an iOS simulator build needs
        """

    def get_target_list(self) -> list:
        return ["all"] + Platform.names()

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="qjsbuild check",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "target",
            metavar=f"{self.get_target_list()}",
            type=str,
            choices=self.get_target_list(),
            nargs="?",
            default="all",
            help="Platform to check (default: all)",
        )
        parser.add_argument(
            "--project-dir",
            type=str,
            default=None,
            help="project root holding local.properties (default: cwd)",
        )
        return parser.parse_args(argv, namespace=CliNameSpace())

    def exec(self, context: CliContext, args: CliNameSpace):
        print(f"🔍 Checking {args.target} build configuration...\n")

        env = BuildEnvironment.capture(args.project_dir or context.project_dir)
        checker = ToolchainChecker(env)
        if args.target == "all":
            checker.check_all()
        else:
            checker.check_platform(Platform.from_name(args.target))

        checker.print_summary()
        if checker.errors:
            sys.exit(1)


class ToolchainChecker:
    def __init__(self, env: BuildEnvironment, locator: ToolchainLocator = None):
        self.env = env
        self.locator = locator or ToolchainLocator(env)
        self.java_homes = JavaHomeResolver(env)
        self.warnings = []
        self.errors = []

    def print_ok(self, msg):
        """Print success message"""
        print(f"  ✅ {msg}")

    def print_error(self, msg):
        """Print error message"""
        print(f"  ❌ {msg}")
        self.errors.append(msg)

    def print_warning(self, msg):
        """Print warning message"""
        print(f"  ⚠️  {msg}")
        self.warnings.append(msg)

    def print_info(self, msg):
        """Print info message"""
        print(f"  ℹ️  {msg}")

    def print_section(self, title):
        """Print section header"""
        print(f"\n{'='*60}")
        print(f"  {title}")
        print(f"{'='*60}")

    def check_tool(self, tool: Tool, required: bool):
        found = self.locator.locate(tool)
        if found is not None:
            self.print_ok(f"{tool.value}: {found.path} (from {found.source})")
        elif required:
            self.print_error(f"{tool.value}: Not found")
            self.print_info(f"Install {tool.value} or set {tool.env_var}")
        else:
            self.print_info(f"{tool.value}: Not found (not needed for this target)")
        return found

    def check_java_home(self, key: str, required: bool):
        source = self.java_homes.source_of(key)
        if source is not None:
            self.print_ok(f"{key}: {self.java_homes.lookup(key)} (from {source})")
        elif required:
            self.print_error(f"{key}: Not set in env vars or local.properties")
        else:
            self.print_warning(f"{key}: Not set (only needed for --jni builds)")

    def check_platform(self, platform: Platform):
        self.print_section(f"Platform {platform}")
        self.print_info(f"Generator: {platform.generator.flag}")
        self.check_tool(Tool.CMAKE, required=True)
        self.check_tool(Tool.NINJA, required=platform.requires_ninja)
        key = JAVA_HOME_KEYS[platform]
        if key is None:
            self.print_info("JNI builds are not available for this platform")
        else:
            self.check_java_home(key, required=False)

    def check_all(self):
        self.print_section("Build Tools")
        self.check_tool(Tool.CMAKE, required=True)
        self.check_tool(Tool.NINJA, required=True)

        self.print_section("Target JDKs")
        for key in JAVA_HOME_KEYS.values():
            if key is not None:
                self.check_java_home(key, required=False)

    def print_summary(self):
        self.print_section("Summary")
        if not self.errors and not self.warnings:
            print("  ✅ All checks passed")
        for msg in self.warnings:
            print(f"  ⚠️  {msg}")
        for msg in self.errors:
            print(f"  ❌ {msg}")
