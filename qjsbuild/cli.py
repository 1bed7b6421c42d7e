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

import os
import sys
import importlib
import argparse

from qjsbuild.build_scripts.errors import QjsBuildError
from qjsbuild.utils.context.namespace import CliNameSpace
from qjsbuild.utils.context.context import CliContext
from qjsbuild.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """QJSBUILD - QuickJS Native Library Build Tool

Builds the QuickJS native library with CMake for:
Windows (x64), Linux (x64, aarch64), macOS (x64, aarch64),
iOS (device, x64 simulator, aarch64 simulator)

USAGE:
    qjsbuild <command> [options]

COMMANDS:
    build       Build the native library for one or more platforms
    check       Check cmake, ninja and JDK locations

EXAMPLES:
    qjsbuild build linux_x64 --release                  # Shared library, MinSizeRel
    qjsbuild build macos_aarch64 --jni --link-type static
    qjsbuild build ios_aarch64 ios_x64 --link-type static --output-dir out --platform-suffix
    qjsbuild check linux_x64                            # Check toolchain for a platform

For more information on a specific command:
    qjsbuild <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if command.startswith(("_", "test_")) or not command.endswith(".py"):
                continue
            arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def _parser(self, add_help) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="qjsbuild",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs="?",
            choices=self.get_command_list(),
        )
        return parser

    def cli(self, argv=None) -> CliNameSpace:
        argv = sys.argv[1:] if argv is None else argv
        # Help for the main command only (qjsbuild --help), not for subcommands
        if len(argv) == 1 and argv[0] in ["--help", "-h"]:
            self._parser(add_help=True).print_help()
            sys.exit(0)

        # parse only known args - this will NOT consume the subcommand options
        args, unknown = self._parser(add_help=False).parse_known_args(
            argv, namespace=CliNameSpace()
        )
        # drop the subcommand token only, option values may share its name
        args.rest = list(argv)
        if args.subcommand in args.rest:
            args.rest.remove(args.subcommand)
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self._parser(add_help=True).print_help()
            sys.exit(1)

        module = importlib.import_module(f"{PACKAGE_NAME}.commands.{args.subcommand}")
        klass = getattr(module, args.subcommand.capitalize())
        sub_cmd = klass()
        try:
            sub_cmd.exec(context, sub_cmd.cli(args.rest))
        except QjsBuildError as e:
            print(f"ERROR: {e}")
            sys.exit(1)


def main():
    cmd = Cli()
    cmd.exec(CliContext(), cmd.cli())


if __name__ == "__main__":
    main()
