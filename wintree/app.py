from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, List, Optional, Tuple

from .config import (
    LOG_FILE,
    VERSION,
    InspectorOptions,
    InspectorSettings,
    compile_filter_regex,
    consume_load_warnings,
    parse_non_neg_int,
    parse_pid,
    parse_rect_wh,
)
from .errors import ConfigError, ProcessNotFoundError
from .inspector import TreeSnapshot, WindowTreeInspector
from .logging_setup import setup_logging
from .render_json import build_document, dumps_document, write_document
from .render_text import TextTreeRenderer
from .services import ProcessInspector
from .win32_api import Win32API

_EPILOG = """\
examples:
  wintree 1234 -v -m 200x100 -x 1600x1200 -r
  wintree AppleMusic --visibleOnly --minRect=200x100 --rect
  wintree -p 1234 -avsrjP -o tree.json

Flags without a value can be bundled (-avsrjP); -d, -m and -x also accept
an attached value (-d6, -m800x600). A filter value that starts with "-"
must be attached with "=": --titleContains=-foo, -t=-foo.
"""


def _arg_type(parser_fn: Callable[[str], object]) -> Callable[[str], object]:
    def _convert(value: str):
        try:
            return parser_fn(value)
        except ConfigError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    _convert.__name__ = getattr(parser_fn, "__name__", "value")
    return _convert


def _pid_value(value: str) -> int:
    pid = parse_pid(value)
    if pid is None:
        raise ConfigError(f"Invalid --pid value: {value}")
    return pid


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wintree",
        description="Print the window tree of a process (by name or PID) as text or JSON",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("target", nargs="?", default=None, help="Process name or PID (decimal or 0x hex)")

    target = parser.add_argument_group("target")
    target.add_argument("-p", "--pid", type=_arg_type(_pid_value), default=None, help="Target PID")
    target.add_argument("-n", "--name", default=None, help="Target process name")

    tree = parser.add_argument_group("tree")
    tree.add_argument(
        "-d",
        "--maxDepth",
        dest="max_depth",
        type=_arg_type(lambda v: parse_non_neg_int(v, "--maxDepth")),
        default=None,
        help="Max tree depth (default: unlimited)",
    )
    tree.add_argument("-a", "--ascii", dest="ascii_tree", action="store_true", help="Use ASCII tree glyphs")
    tree.add_argument(
        "-P",
        "--childPidOnly",
        dest="child_pid_only",
        action="store_true",
        help="Only enumerate child windows owned by the target PID(s)",
    )

    filters = parser.add_argument_group("filters (ancestors of a match are always kept)")
    filters.add_argument("-v", "--visibleOnly", dest="visible_only", action="store_true", help="Visible windows only")
    filters.add_argument(
        "-m",
        "--minRect",
        dest="min_rect",
        type=_arg_type(lambda v: parse_rect_wh(v, "--minRect")),
        default=None,
        metavar="WxH",
        help="Minimum window size",
    )
    filters.add_argument(
        "-x",
        "--maxRect",
        dest="max_rect",
        type=_arg_type(lambda v: parse_rect_wh(v, "--maxRect")),
        default=None,
        metavar="WxH",
        help="Maximum window size",
    )
    filters.add_argument("-c", "--classContains", dest="class_contains", default=None, metavar="TEXT")
    filters.add_argument("-t", "--titleContains", dest="title_contains", default=None, metavar="TEXT")
    filters.add_argument(
        "-C",
        "--classRegex",
        dest="class_regex",
        type=_arg_type(lambda v: compile_filter_regex(v, "--classRegex")),
        default=None,
        metavar="REGEX",
    )
    filters.add_argument(
        "-T",
        "--titleRegex",
        dest="title_regex",
        type=_arg_type(lambda v: compile_filter_regex(v, "--titleRegex")),
        default=None,
        metavar="REGEX",
    )

    output = parser.add_argument_group("output")
    output.add_argument("-s", "--style", dest="show_style", action="store_true", help="Show Style/ExStyle")
    output.add_argument("-r", "--rect", dest="show_rect", action="store_true", help="Show Rect/Client size")
    output.add_argument("-j", "--json", dest="json_output", action="store_true", help="Output JSON")
    output.add_argument("-o", "--jsonFile", dest="json_file", default=None, metavar="PATH", help="Write JSON to file")

    log_group = parser.add_argument_group("logging")
    log_group.add_argument("--log-level", default=None, help="Console log level (default: from settings, WARNING)")
    log_group.add_argument("--log-file", action="store_true", help=f"Also log to {LOG_FILE}")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def parse_options(
    parser: argparse.ArgumentParser,
    argv: Optional[List[str]],
    settings: Optional[InspectorSettings] = None,
) -> Tuple[InspectorOptions, argparse.Namespace]:
    settings = settings or InspectorSettings()
    args = parser.parse_args(argv)

    target_pid: Optional[int] = args.pid
    target_name: Optional[str] = args.name
    if target_pid is None and target_name is None:
        if args.target is None or not args.target.strip():
            parser.error("a target process name or PID is required")
        target_pid = parse_pid(args.target)
        if target_pid is None:
            target_name = args.target

    if args.json_file and not args.json_output:
        parser.error("-o/--jsonFile can only be used together with -j/--json")

    options = InspectorOptions(
        target_pid=target_pid,
        target_name=target_name,
        ascii_tree=bool(args.ascii_tree or settings.ascii_tree),
        max_depth=args.max_depth,
        child_pid_only=args.child_pid_only,
        visible_only=args.visible_only,
        min_rect=args.min_rect,
        max_rect=args.max_rect,
        show_style=args.show_style,
        show_rect=args.show_rect,
        class_contains=args.class_contains,
        title_contains=args.title_contains,
        class_regex=args.class_regex,
        title_regex=args.title_regex,
        json_output=args.json_output,
        json_file=args.json_file or None,
    )
    return options, args


def _use_utf8_stdout(logger: logging.Logger) -> None:
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if not callable(reconfigure):
        return
    try:
        reconfigure(encoding="utf-8")
    except (ValueError, OSError) as exc:
        logger.debug("stdout stays %s (%s)", getattr(sys.stdout, "encoding", "?"), exc.__class__.__name__)


def _print_text(snapshot: TreeSnapshot, options: InspectorOptions) -> int:
    if snapshot.matched_top_count == 0:
        print("\n(Note) No top-level window found for the target PID(s).")
        print("\n==== Done ====")
        return 0
    if not snapshot.roots:
        print("\n(Filter result) No windows matched the given filters.")
        print("\n==== Done ====")
        return 0

    for proc in snapshot.processes:
        print(f"Found Process: {proc.name} (PID: {proc.pid})")

    renderer = TextTreeRenderer(options.ascii_tree, options.show_style, options.show_rect)
    for root in snapshot.roots:
        print()
        print("=== Window Tree (Top-level) ===")
        for line in renderer.render(root):
            print(line)

    print("\n==== Done ====")
    return 0


def _is_windows() -> bool:
    return os.name == "nt"


def main(argv: Optional[List[str]] = None) -> int:
    if not _is_windows():
        print("This tool only supports Windows.", file=sys.stderr)
        return 2

    settings = InspectorSettings.load()
    parser = build_parser()
    options, args = parse_options(parser, argv if argv is not None else sys.argv[1:], settings)

    log_file = LOG_FILE if (args.log_file or settings.log_to_file) else None
    logger = setup_logging(args.log_level or settings.log_level, log_file)
    for warning in consume_load_warnings():
        logger.warning(warning)
    _use_utf8_stdout(logger)

    try:
        processes = ProcessInspector.resolve_targets(options.target_pid, options.target_name)
    except ProcessNotFoundError as exc:
        logger.debug("target resolution failed: %s", exc)
        print(exc)
        return 1

    inspector = WindowTreeInspector(logger, options, api=Win32API())
    snapshot = inspector.snapshot(processes)

    if options.json_output:
        document = build_document(snapshot, options)
        if options.json_file:
            try:
                write_document(document, options.json_file)
            except OSError as exc:
                logger.debug("JSON write failed: %r", exc)
                print(f"Could not write JSON file {options.json_file}: {exc.strerror or exc}", file=sys.stderr)
                return 1
            logger.info("JSON written to %s", options.json_file)
        else:
            print(dumps_document(document))
        return 0

    return _print_text(snapshot, options)


__all__ = ["main", "build_parser", "parse_options", "VERSION"]
