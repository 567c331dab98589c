#!/usr/bin/env python3
"""
Peripatos — Ancient Greek περίπατος (walking about)

A directory-tree maintenance tool. Walks a root directory, picks files by
extension and minimum size, and lists, archives or deletes them. Nothing is
changed on disk unless --archive or --delete is given.

Usage:
    peripatos <root> --list                       # Print matching paths
    peripatos <root> --ext .log --min-size 10M    # Filter only (dry run)
    peripatos <root> --ext .log --delete --log deleted.txt
    peripatos <root> --ext .log --archive /backup # Copy into /backup/<root>.tar.gz
    peripatos --show-stats                        # Show persistent run statistics
    peripatos --reset-stats                       # Clear persistent run statistics
"""

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, TextIO

from rich.logging import RichHandler

import tree_walker
from auxiliary import format_bytes, format_path_for_display, parse_size
from console_ui import ConsoleUI
from file_filter import FileEntry
from file_operations import Action, select_action
from peripatos_config import PeripatosStats, StatsStore
from walk_config import WalkConfig
from walk_errors import WalkError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


@dataclass
class RunTally:
    """Counts collected from the walker's progress callback"""

    matched: int = 0
    matched_bytes: int = 0
    acted: int = 0
    deleted_bytes: int = 0

    def record(self, entry: FileEntry, action: Action):
        self.matched += 1
        self.matched_bytes += entry.size
        if action is not Action.NONE:
            self.acted += 1
        if action is Action.DELETE:
            self.deleted_bytes += entry.size


def setup_logging(verbose: bool, ui: ConsoleUI):
    """Route diagnostics through rich on the UI console"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=ui.console, show_path=False)],
        force=True,
    )


def allow_undecodable_names(stream: TextIO):
    """Let *stream* write back file names that are not valid in its encoding.

    os.fsdecode maps such bytes to lone surrogates; surrogateescape turns them
    back into the original bytes instead of failing the write.
    """
    reconfigure = getattr(stream, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")


# ---------------------------------------------------------------------------
# Peripatos
# ---------------------------------------------------------------------------


class Peripatos:
    """Main application class for the Peripatos tree walker."""

    def __init__(self, args: argparse.Namespace, out: Optional[TextIO] = None):
        self.args = args
        self.out = out if out is not None else sys.stdout
        self.ui = ConsoleUI()
        setup_logging(getattr(args, "verbose", False), self.ui)
        self.stats_store = StatsStore()

    # -- stats ---------------------------------------------------------------

    def _load_stats(self) -> Optional[PeripatosStats]:
        try:
            return self.stats_store.load()
        except (OSError, ValueError) as e:
            self.ui.print_warning(f"Could not load statistics: {e}")
            return None

    def _save_stats(self, stats: PeripatosStats):
        try:
            self.stats_store.save(stats)
        except (OSError, ValueError) as e:
            self.ui.print_warning(f"Could not save statistics: {e}")

    def _record_run(self, action: Action, tally: RunTally):
        stats = self._load_stats()
        if stats is None:
            return
        stats.record_run(
            deleted=tally.acted if action is Action.DELETE else 0,
            archived=tally.acted if action is Action.ARCHIVE else 0,
            reclaimed_bytes=tally.deleted_bytes,
        )
        self._save_stats(stats)

    def show_stats(self):
        stats = self._load_stats()
        if stats is None:
            return
        self.ui.show_key_values(
            {
                "Runs": stats.total_runs,
                "Files deleted": stats.deleted_files,
                "Files archived": stats.archived_files,
                "Space reclaimed": format_bytes(stats.reclaimed_bytes),
                "Last run": stats.last_run or "never",
            },
            title="Peripatos statistics",
        )

    def reset_stats(self):
        self._save_stats(PeripatosStats())
        self.ui.print_success("Statistics cleared.")

    # -- walking -------------------------------------------------------------

    def build_config(self) -> WalkConfig:
        """Translate parsed arguments into a WalkConfig without a log sink"""
        min_size = parse_size(self.args.min_size) if self.args.min_size else 0
        return WalkConfig(
            ext=self.args.ext or "",
            min_size=min_size,
            list_files=self.args.list,
            delete=self.args.delete,
            archive_dir=self.args.archive or "",
        )

    def check_config(self, config: WalkConfig):
        """Warn about (or with --strict reject) ambiguous configurations"""
        if config.ext and not config.ext.startswith("."):
            self.ui.print_warning(f"Extension '{config.ext}' has no leading '.' and will not match any file")

        requested = config.requested_actions
        if len(requested) > 1:
            if self.args.strict:
                config.validate_exclusive()
            self.ui.print_warning(
                f"Several actions requested ({', '.join(requested)}); only '{requested[0]}' will be applied"
            )

    def report(self, root: str, action: Action, tally: RunTally):
        outcome = "no action taken" if action is Action.NONE else f"{action.value}: {tally.acted}"
        self.ui.print_success(
            f"{tally.matched} matching files ({format_bytes(tally.matched_bytes)}) under "
            f"{format_path_for_display(root)}, {outcome}"
        )

    def walk(self, root: str, config: WalkConfig) -> int:
        action = select_action(config)
        tally = RunTally()
        logger.debug("Walk configuration: %s", config)
        try:
            tree_walker.run(root, self.out, config, progress_callback=tally.record)
        except WalkError as e:
            self.ui.print_error(str(e))
            if tally.acted:
                self.ui.print_warning(f"Stopped after {tally.acted} files; completed actions are kept")
            status = EXIT_ERROR
        else:
            status = EXIT_OK
        finally:
            self._record_run(action, tally)

        try:
            self.out.flush()
        except (OSError, ValueError) as e:
            self.ui.print_error(f"Cannot write output: {e}")
            return EXIT_ERROR

        if status == EXIT_OK:
            self.report(root, action, tally)
        return status

    # -- main entry point ----------------------------------------------------

    def run(self) -> int:
        if getattr(self.args, "show_stats", False):
            self.show_stats()
            return EXIT_OK
        if getattr(self.args, "reset_stats", False):
            self.reset_stats()
            return EXIT_OK

        root = self.args.root
        if not Path(root).exists():
            self.ui.print_error(f"No such file or directory: {root}")
            return EXIT_ERROR

        try:
            config = self.build_config()
            self.check_config(config)
        except ValueError as e:
            self.ui.print_error(f"Invalid minimum size: {e}")
            return EXIT_ERROR
        except WalkError as e:
            self.ui.print_error(str(e))
            return EXIT_ERROR

        allow_undecodable_names(self.out)
        if not self.args.log:
            allow_undecodable_names(sys.stdout)
            return self.walk(root, replace(config, log_sink=sys.stdout))

        try:
            log_file = open(self.args.log, "a", encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            self.ui.print_error(f"Cannot open log file {self.args.log}: {e}")
            return EXIT_ERROR
        with log_file:
            return self.walk(root, replace(config, log_sink=log_file))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="peripatos",
        description="Peripatos — list, archive or delete files in a directory tree",
    )
    parser.add_argument("root", nargs="?", default=".", help="Root directory to walk (default: current directory)")
    parser.add_argument("--ext", default="", help="Only pick files with this extension, e.g. .log")
    parser.add_argument("--min-size", type=str, default=None, help="Only pick files larger than this (e.g. 512, 10K, 1M)")
    parser.add_argument("--list", action="store_true", help="Print matching paths")
    parser.add_argument("--delete", action="store_true", help="Delete matching files")
    parser.add_argument("--archive", metavar="DIR", default="", help="Archive matching files into DIR")
    parser.add_argument("--log", metavar="FILE", default=None, help="Append the deletion log to FILE (default: stdout)")
    parser.add_argument("--strict", action="store_true", help="Refuse to run when more than one action is requested")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("--show-stats", action="store_true", help="Show persistent run statistics")
    parser.add_argument("--reset-stats", action="store_true", help="Clear persistent run statistics")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    app = Peripatos(args)
    try:
        return app.run()
    except KeyboardInterrupt:
        app.ui.print_warning("\nInterrupted.")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
