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

import subprocess
import sys


class CommandRunner:
    """Runs one command and returns its exit status."""

    def run(self, working_dir, command) -> int:
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """
    Runs commands as child processes.

    The child writes straight to this process' stdout and stderr so build
    progress shows up live. There is no timeout; interrupting this process
    interrupts the child as well.
    """

    def run(self, working_dir, command) -> int:
        if sys.platform.startswith("win"):
            # Windows: set console charset to UTF-8
            subprocess.call("chcp 65001", shell=True, stdout=subprocess.DEVNULL)
        sys.stdout.flush()
        return subprocess.call(list(command), cwd=working_dir)
