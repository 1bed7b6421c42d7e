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
JDK home lookup for JNI builds.

A JNI build needs the JDK of the *target* platform, which is not necessarily
the JDK the build runs with. Each desktop (os, arch) pair has its own key,
looked up first in the environment and then in local.properties.
"""

from typing import Optional

from qjsbuild.build_scripts.build_utils import (
    LOCAL_PROPERTIES_FILE_NAME,
    BuildEnvironment,
)
from qjsbuild.build_scripts.errors import ConfigurationError, UnsupportedPlatformError
from qjsbuild.build_scripts.platforms import Platform

# None marks platforms that cannot be built with JNI
JAVA_HOME_KEYS = {
    Platform.windows_x64: "JAVA_HOME_WINDOWS_X64",
    Platform.linux_x64: "JAVA_HOME_LINUX_X64",
    Platform.linux_aarch64: "JAVA_HOME_LINUX_AARCH64",
    Platform.macos_x64: "JAVA_HOME_MACOS_X64",
    Platform.macos_aarch64: "JAVA_HOME_MACOS_AARCH64",
    Platform.ios_aarch64: None,
    Platform.ios_x64: None,
    Platform.ios_simulator_aarch64: None,
}


def java_home_key(platform: Platform) -> str:
    key = JAVA_HOME_KEYS[platform]
    if key is None:
        raise UnsupportedPlatformError(
            f"Unsupported platform: '{platform}'",
            hint="JNI builds are only available for windows, linux and macos targets.",
        )
    return key


class JavaHomeResolver:
    def __init__(self, env: BuildEnvironment):
        self.env = env

    def lookup(self, key: str) -> Optional[str]:
        """Environment variable first, local.properties second."""
        value = self.env.getenv(key)
        if value is not None:
            return value
        return self.env.local_properties.get(key)

    def source_of(self, key: str) -> Optional[str]:
        if self.env.getenv(key) is not None:
            return "env"
        if key in self.env.local_properties:
            return LOCAL_PROPERTIES_FILE_NAME
        return None

    def resolve(self, platform: Platform) -> str:
        key = java_home_key(platform)
        value = self.lookup(key)
        if value is None:
            raise ConfigurationError(
                f"'{key}' is not found in env vars or {LOCAL_PROPERTIES_FILE_NAME}",
                hint=(
                    f"Set the {key} environment variable or add '{key}=<jdk path>' "
                    f"to {self.env.local_properties_path or LOCAL_PROPERTIES_FILE_NAME}"
                ),
            )
        return value
