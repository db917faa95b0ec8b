"""Entry point for the pi-lineedit CLI: an interactive read loop."""

from __future__ import annotations

import argparse
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="pi-lineedit: read lines with shell-style editing")
    parser.add_argument("--prompt", default=None, help="Prompt text (default: '> ')")
    parser.add_argument(
        "--complete",
        nargs="*",
        default=[],
        metavar="WORD",
        help="Words offered by tab completion",
    )
    parser.add_argument("--keys", action="store_true", help="List the key bindings and exit")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )

    from pi.lineedit.config import LineEditorConfig
    from pi.lineedit.editor import line_editor
    from pi.lineedit.errors import EndOfFileError
    from pi.lineedit.host import CommandCompletionHost
    from pi.lineedit.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager

    config = LineEditorConfig.from_env()
    if args.prompt is not None:
        config.prompt = args.prompt

    if args.keys:
        kb = KeybindingsManager(config.keybindings)
        for binding in DEFAULT_KEYBINDINGS:
            sys.stdout.write(f"{binding:<20} {', '.join(kb.get_keys(binding))}\n")
        return 0

    editor = line_editor(config)
    host = CommandCompletionHost(args.complete)

    while True:
        try:
            line = editor.read_line(host)
        except EndOfFileError:
            return 0
        if line is None:
            continue
        sys.stdout.write(f"read line: {line!r}\n")
        sys.stdout.flush()
        host.history().add(line)


if __name__ == "__main__":
    sys.exit(main())
