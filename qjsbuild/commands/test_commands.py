#!/usr/bin/env python3
"""
Tests for the build and check subcommands.

Run with: python3 -m pytest qjsbuild
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from qjsbuild.build_scripts.build_utils import BuildEnvironment
from qjsbuild.build_scripts.cmake_args import LinkType
from qjsbuild.build_scripts.errors import ProcessExecutionError
from qjsbuild.build_scripts.platforms import Platform
from qjsbuild.build_scripts.toolchain import ToolchainLocator
from qjsbuild.cli import Cli
from qjsbuild.commands.build import Build
from qjsbuild.commands.check import ToolchainChecker
from qjsbuild.utils.context.context import CliContext


class TestCli(unittest.TestCase):

    def test_command_list(self):
        self.assertEqual(Cli().get_command_list(), ["build", "check"])

    def test_subcommand_args_are_passed_on(self):
        args = Cli().cli(["build", "linux_x64", "--release"])
        self.assertEqual(args.subcommand, "build")
        self.assertEqual(args.rest, ["linux_x64", "--release"])

    def test_option_value_named_like_subcommand_is_kept(self):
        args = Cli().cli(["build", "linux_x64", "--output-dir", "build"])
        self.assertEqual(args.rest, ["linux_x64", "--output-dir", "build"])
        parsed = Build().cli(args.rest)
        self.assertEqual(parsed.output_dir, "build")

        args = Cli().cli(["check", "--project-dir", "check"])
        self.assertEqual(args.subcommand, "check")
        self.assertEqual(args.rest, ["--project-dir", "check"])

    def test_build_error_exits_with_status_1(self):
        error = ProcessExecutionError(["cmake", "./"], 1)
        with patch("qjsbuild.commands.build.Build.exec", side_effect=error):
            with self.assertRaises(SystemExit) as cm:
                cli = Cli()
                cli.exec(CliContext(), cli.cli(["build", "linux_x64"]))
        self.assertEqual(cm.exception.code, 1)


class TestBuildCommand(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.project_dir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def run_build(self, argv):
        cmd = Build()
        with patch("qjsbuild.commands.build.build_quickjs_native_library") as build:
            cmd.exec(CliContext(self.project_dir), cmd.cli(argv))
        return build

    def test_defaults(self):
        build = self.run_build(["linux_x64"])
        self.assertEqual(build.call_count, 1)
        cmake_file, config = build.call_args[0]
        self.assertEqual(
            cmake_file, os.path.join(os.path.abspath(self.project_dir), "native/CMakeLists.txt")
        )
        self.assertIs(config.platform, Platform.linux_x64)
        self.assertIs(config.link_type, LinkType.SHARED)
        self.assertFalse(config.release)
        self.assertFalse(config.with_jni)
        self.assertIsNone(config.output_dir)
        self.assertEqual(build.call_args[1]["library_name"], "quickjs")

    def test_options(self):
        build = self.run_build(
            [
                "macos_aarch64",
                "--link-type", "static",
                "--jni",
                "--release",
                "--output-dir", "out",
                "--platform-suffix",
            ]
        )
        config = build.call_args[0][1]
        self.assertIs(config.link_type, LinkType.STATIC)
        self.assertTrue(config.with_jni)
        self.assertTrue(config.release)
        self.assertEqual(config.output_dir, "out")
        self.assertTrue(config.with_platform_suffix)

    def test_several_platforms_are_built_in_order(self):
        build = self.run_build(["ios_aarch64", "ios_x64", "--link-type", "static"])
        platforms = [c[0][1].platform for c in build.call_args_list]
        self.assertEqual(platforms, [Platform.ios_aarch64, Platform.ios_x64])

    def test_unknown_platform_is_rejected(self):
        with self.assertRaises(SystemExit):
            Build().cli(["android_arm64"])

    def test_output_dir_from_config_file(self):
        with open(os.path.join(self.project_dir, "QJSBUILD.toml"), "w") as f:
            f.write('[native]\noutput_dir = "libs"\nlibrary_name = "qjs"\n')
        build = self.run_build(["linux_x64"])
        config = build.call_args[0][1]
        self.assertEqual(config.output_dir, os.path.join(os.path.abspath(self.project_dir), "libs"))
        self.assertEqual(build.call_args[1]["library_name"], "qjs")


class TestToolchainChecker(unittest.TestCase):

    def checker(self, environ, local_properties=None):
        env = BuildEnvironment(environ=environ, local_properties=local_properties or {})
        return ToolchainChecker(env, ToolchainLocator(env, well_known_paths={}))

    def test_desktop_platform_needs_ninja(self):
        checker = self.checker({"CMAKE_PATH": __file__})
        checker.check_platform(Platform.linux_x64)
        self.assertEqual(len(checker.errors), 1)
        self.assertIn("ninja", checker.errors[0])

    def test_ios_platform_does_not_need_ninja(self):
        checker = self.checker({"CMAKE_PATH": __file__})
        checker.check_platform(Platform.ios_x64)
        self.assertEqual(checker.errors, [])

    def test_java_homes_are_warnings(self):
        checker = self.checker(
            {"CMAKE_PATH": __file__, "NINJA_PATH": __file__},
            {"JAVA_HOME_LINUX_X64": "/jdk"},
        )
        checker.check_all()
        self.assertEqual(checker.errors, [])
        self.assertEqual(len(checker.warnings), 4)


if __name__ == "__main__":
    unittest.main()
