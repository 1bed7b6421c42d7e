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

"""Errors raised by the native library build pipeline. All of them are fatal."""


class QjsBuildError(RuntimeError):
    def __init__(self, message, hint=None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self):
        if self.hint:
            return f"{self.message}\n{self.hint}"
        return self.message


class ConfigurationError(QjsBuildError):
    """A required SDK home is set neither in the environment nor in local.properties."""


class ToolchainMissingError(QjsBuildError):
    """A required executable (cmake, ninja) could not be found."""


class UnsupportedPlatformError(QjsBuildError):
    pass


class ProcessExecutionError(QjsBuildError):
    """A command exited non-zero, or could not be started (returncode is None)."""

    def __init__(self, command, returncode=None, reason=None):
        if returncode is None:
            message = f"Failed to run command: {' '.join(command)} ({reason})"
        else:
            message = f"Command failed with exit code {returncode}: {' '.join(command)}"
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode


class ArtifactMissingError(QjsBuildError):
    """The built library is missing, or cannot be copied to the output directory."""
