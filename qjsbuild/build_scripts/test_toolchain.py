#!/usr/bin/env python3
"""
Tests for cmake / ninja discovery.

Run with: python3 -m pytest qjsbuild
"""

import os
import stat
import tempfile
import unittest

from qjsbuild.build_scripts.build_utils import BuildEnvironment
from qjsbuild.build_scripts.errors import ToolchainMissingError
from qjsbuild.build_scripts.toolchain import Tool, ToolchainLocator


def make_executable(path):
    with open(path, "w") as f:
        f.write("#!/bin/sh\n")
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class TestToolchainLocator(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.path_dir = os.path.join(self.tmp, "bin")
        self.known_dir = os.path.join(self.tmp, "known")
        os.makedirs(self.path_dir)
        os.makedirs(self.known_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def locator(self, environ, well_known=None):
        env = BuildEnvironment(environ=environ)
        return ToolchainLocator(env, well_known_paths=well_known or {}, windows=False)

    def test_env_override_wins(self):
        override = make_executable(os.path.join(self.tmp, "my-ninja"))
        known = make_executable(os.path.join(self.known_dir, "ninja"))
        make_executable(os.path.join(self.path_dir, "ninja"))

        found = self.locator(
            {"NINJA_PATH": override, "PATH": self.path_dir},
            {Tool.NINJA: [known]},
        ).locate(Tool.NINJA)

        self.assertEqual(found.path, override)
        self.assertEqual(found.source, "env")
        self.assertIs(found.tool, Tool.NINJA)

    def test_env_override_ignored_when_missing(self):
        known = make_executable(os.path.join(self.known_dir, "cmake"))
        found = self.locator(
            {"CMAKE_PATH": os.path.join(self.tmp, "nope")},
            {Tool.CMAKE: [known]},
        ).locate(Tool.CMAKE)
        self.assertEqual(found.path, known)
        self.assertEqual(found.source, "well-known")

    def test_well_known_paths_in_order_before_path(self):
        second = make_executable(os.path.join(self.known_dir, "cmake"))
        make_executable(os.path.join(self.path_dir, "cmake"))
        first_missing = os.path.join(self.tmp, "missing", "cmake")

        found = self.locator(
            {"PATH": self.path_dir}, {Tool.CMAKE: [first_missing, second]}
        ).locate(Tool.CMAKE)
        self.assertEqual(found.path, second)

    def test_path_scan(self):
        other_dir = os.path.join(self.tmp, "other")
        os.makedirs(other_dir)
        expected = make_executable(os.path.join(self.path_dir, "ninja"))
        path = os.pathsep.join([other_dir, self.path_dir])

        found = self.locator({"PATH": path}).locate(Tool.NINJA)
        self.assertEqual(found.path, expected)
        self.assertEqual(found.source, "PATH")

    @unittest.skipIf(os.name == "nt", "no execute bit on Windows")
    def test_path_scan_skips_non_executable(self):
        with open(os.path.join(self.path_dir, "ninja"), "w") as f:
            f.write("")
        os.chmod(os.path.join(self.path_dir, "ninja"), 0o644)
        self.assertIsNone(self.locator({"PATH": self.path_dir}).locate(Tool.NINJA))

    def test_path_scan_windows_exe(self):
        expected = make_executable(os.path.join(self.path_dir, "cmake.exe"))
        env = BuildEnvironment(environ={"PATH": self.path_dir})
        locator = ToolchainLocator(env, well_known_paths={}, windows=True)
        self.assertEqual(locator.locate(Tool.CMAKE).path, expected)

    def test_path_scan_windows_pathext(self):
        expected = make_executable(os.path.join(self.path_dir, "ninja.bat"))
        env = BuildEnvironment(environ={"PATH": self.path_dir, "PATHEXT": ".EXE;.BAT"})
        locator = ToolchainLocator(env, well_known_paths={}, windows=True)
        self.assertEqual(locator.locate(Tool.NINJA).path, expected)

    def test_relative_locations_are_made_absolute(self):
        make_executable(os.path.join(self.path_dir, "cmake"))
        make_executable(os.path.join(self.tmp, "my-ninja"))
        cwd = os.getcwd()
        os.chdir(self.tmp)
        try:
            locator = self.locator({"PATH": "bin", "NINJA_PATH": "my-ninja"})
            cmake = locator.locate(Tool.CMAKE)
            ninja = locator.locate(Tool.NINJA)
        finally:
            os.chdir(cwd)

        self.assertTrue(os.path.isabs(cmake.path))
        self.assertEqual(cmake.source, "PATH")
        self.assertTrue(os.path.samefile(cmake.path, os.path.join(self.path_dir, "cmake")))
        self.assertTrue(os.path.isabs(ninja.path))
        self.assertEqual(ninja.source, "env")
        self.assertTrue(os.path.samefile(ninja.path, os.path.join(self.tmp, "my-ninja")))

    def test_not_found(self):
        locator = self.locator({"PATH": self.path_dir})
        self.assertIsNone(locator.locate(Tool.CMAKE))
        self.assertIsNone(locator.locate(Tool.NINJA))

    def test_require_raises_with_instructions(self):
        with self.assertRaises(ToolchainMissingError) as cm:
            self.locator({}).require(Tool.CMAKE)
        self.assertIn("Cannot find cmake executable", cm.exception.message)
        self.assertIn("brew install cmake", cm.exception.hint)
        self.assertIn("CMAKE_PATH", cm.exception.hint)

    def test_env_var_names(self):
        self.assertEqual(Tool.CMAKE.env_var, "CMAKE_PATH")
        self.assertEqual(Tool.NINJA.env_var, "NINJA_PATH")


if __name__ == "__main__":
    unittest.main()
