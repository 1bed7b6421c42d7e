#!/usr/bin/env python3
"""
Tests for the platform catalog and the per-platform tables.

Run with: python3 -m pytest qjsbuild
"""

import unittest

from qjsbuild.build_scripts.artifact import SHARED_EXTENSIONS, STATIC_SUBDIRS
from qjsbuild.build_scripts.cmake_args import BUILD_SDK_ARGS
from qjsbuild.build_scripts.errors import UnsupportedPlatformError
from qjsbuild.build_scripts.java_home import JAVA_HOME_KEYS
from qjsbuild.build_scripts.platforms import Arch, Generator, OsFamily, Platform


class TestPlatformCatalog(unittest.TestCase):

    def test_eight_platforms(self):
        self.assertEqual(len(list(Platform)), 8)

    def test_identity_is_string_form(self):
        self.assertEqual(str(Platform.linux_x64), "linux_x64")
        self.assertEqual(str(Platform.ios_simulator_aarch64), "ios_simulator_aarch64")

    def test_os_family_and_arch(self):
        self.assertIs(Platform.windows_x64.os_family, OsFamily.WINDOWS)
        self.assertIs(Platform.linux_aarch64.arch, Arch.AARCH64)
        self.assertEqual(Platform.macos_x64.os_name, "macos")
        self.assertIs(Platform.ios_x64.arch, Arch.X64)
        self.assertEqual(Platform.ios_aarch64.os_name, "ios")

    def test_xcode_generator_iff_ios(self):
        for platform in Platform:
            if platform.os_family is OsFamily.IOS:
                self.assertIs(platform.generator, Generator.XCODE, platform)
                self.assertFalse(platform.requires_ninja)
            else:
                self.assertIs(platform.generator, Generator.NINJA, platform)
                self.assertTrue(platform.requires_ninja)

    def test_from_name(self):
        self.assertIs(Platform.from_name("macos_aarch64"), Platform.macos_aarch64)
        self.assertIs(Platform.from_name(" Linux_X64 "), Platform.linux_x64)

    def test_from_unknown_name(self):
        with self.assertRaises(UnsupportedPlatformError) as cm:
            Platform.from_name("android_arm64")
        self.assertIn("android_arm64", str(cm.exception))
        self.assertIn("linux_x64", cm.exception.hint)


class TestTablesAreExhaustive(unittest.TestCase):
    """Every dispatch table must name every member of its enumeration."""

    def test_platform_tables(self):
        for table in (JAVA_HOME_KEYS, BUILD_SDK_ARGS, STATIC_SUBDIRS):
            self.assertEqual(set(table), set(Platform))

    def test_os_family_tables(self):
        self.assertEqual(set(SHARED_EXTENSIONS), set(OsFamily))

    def test_jni_keys_only_for_desktop(self):
        for platform, key in JAVA_HOME_KEYS.items():
            self.assertEqual(key is None, platform.os_family is OsFamily.IOS)


if __name__ == "__main__":
    unittest.main()
