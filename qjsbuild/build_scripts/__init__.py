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

"""Build scripts for the QuickJS native library."""

__all__ = [
    "artifact",
    "build_native",
    "build_utils",
    "cmake_args",
    "errors",
    "java_home",
    "platforms",
    "toolchain",
]
