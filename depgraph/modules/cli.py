# depgraph/modules/cli.py
"""
Central CLI for depgraph.
- Reads a command file (DEPEND / INSTALL / REMOVE / LIST, one per line)
  and applies it to an in-memory dependency graph.
- Uses rich for console output and the component info table.
- Supports --no-color, --quiet, --conf and --debug.

Usage examples:
  depgraph run commands.txt
  depgraph run - < commands.txt
  depgraph info commands.txt TELNET
  python -m depgraph run commands.txt
"""

from __future__ import annotations
import argparse
import configparser
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from depgraph.modules import config as _config
from depgraph.modules import logger
from depgraph.modules.commands import CommandRunner
from depgraph.modules.manager import DependencyManager, UnknownComponent


def make_console(no_color: bool, quiet: bool) -> Console:
    if no_color:
        return Console(color_system=None, force_terminal=False, markup=False, quiet=quiet)
    return Console(quiet=quiet)


def read_lines(path: str) -> List[str]:
    if path == "-":
        return sys.stdin.read().splitlines()
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read().splitlines()


class CLI:
    def __init__(self, console: Console, conf: _config.DepgraphConfig, debug: bool = False,
                 no_color: bool = False, quiet: bool = False):
        self.console = console
        self.conf = conf
        self.debug = debug
        self.no_color = no_color
        self.quiet = quiet
        self.log = self._logger("cli")
        self.indent = " " * conf.getint("output", "indent", fallback=3)
        self.echo_commands = conf.getboolean("output", "echo_commands", fallback=True)

    def _logger(self, name: str) -> logger.Logger:
        log = logger.Logger(name, conf=self.conf)
        if self.debug:
            log.set_level("debug")
        if self.no_color:
            log.set_color(False)
        if self.quiet:
            log.set_console(False)
        return log

    def _print(self, text: str):
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def _error(self, text: str):
        self.console.print(text, style="red", markup=False, highlight=False, soft_wrap=True)

    def _notify(self, line: str):
        self._print(self.indent + line)

    def _load(self, path: str) -> Optional[List[str]]:
        try:
            return read_lines(path)
        except FileNotFoundError:
            self._error(f"File {path} not found")
            return None
        except (OSError, UnicodeDecodeError) as e:
            self._error(f"Cannot read {path}: {e}")
            self.log.error(f"failed to read {path}: {e}")
            return None

    # -----------------------
    # run
    # -----------------------
    def cmd_run(self, args: argparse.Namespace) -> int:
        lines = self._load(args.file)
        if lines is None:
            return 2
        manager = DependencyManager(emit=self._notify, log=self._logger("manager"))
        runner = CommandRunner(
            manager,
            echo=self._print if self.echo_commands else None,
            log=self._logger("commands"),
        )
        rejected = runner.run_lines(lines)
        if rejected:
            self.log.warning(f"{rejected} command(s) rejected in {args.file}")
            return 1
        return 0

    # -----------------------
    # info
    # -----------------------
    def cmd_info(self, args: argparse.Namespace) -> int:
        lines = self._load(args.file)
        if lines is None:
            return 2
        manager = DependencyManager(log=self._logger("manager"))
        CommandRunner(manager, log=self._logger("commands")).run_lines(lines)
        try:
            info = manager.describe(args.component)
        except UnknownComponent as e:
            self._error(str(e))
            return 1

        table = Table(title=Text(info.name))
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("Installed", "yes" if info.installed else "no")
        table.add_row("Dependencies", Text(", ".join(info.dependencies) or "none"))
        table.add_row("Dependents", Text(", ".join(info.dependents) or "none"))
        self.console.print(table)
        return 0


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="depgraph", description="Component dependency manager")
    ap.add_argument("--no-color", action="store_true", help="Disable color output")
    ap.add_argument("--quiet", action="store_true", help="Quiet mode; no output")
    ap.add_argument("--conf", help="Path to depgraph.conf")
    ap.add_argument("--debug", action="store_true", help="Log debug messages to stderr")
    sub = ap.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", aliases=["r"], help="Apply a command file")
    p_run.add_argument("file", help="Command file ('-' for stdin)")

    p_info = sub.add_parser("info", aliases=["in"], help="Show a component after applying a command file")
    p_info.add_argument("file", help="Command file ('-' for stdin)")
    p_info.add_argument("component")

    return ap


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv
    parser = build_argparser()
    args = parser.parse_args(argv)
    console = make_console(args.no_color, args.quiet)

    try:
        conf = _config.DepgraphConfig.from_file(args.conf) if args.conf else _config.config
    except (FileNotFoundError, configparser.Error) as e:
        console.print(str(e), style="red", markup=False, highlight=False, soft_wrap=True)
        return 2

    cli = CLI(console=console, conf=conf, debug=args.debug, no_color=args.no_color, quiet=args.quiet)
    cmd = args.command
    if cmd in ("run", "r"):
        return cli.cmd_run(args)
    if cmd in ("info", "in"):
        return cli.cmd_info(args)
    console.print("Unknown command", style="red")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
