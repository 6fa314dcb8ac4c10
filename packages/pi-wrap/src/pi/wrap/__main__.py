"""Entry point for the pi-wrap CLI."""

from __future__ import annotations

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="pi-wrap: word-wrap text into visual lines")
    parser.add_argument("file", nargs="?", default=None, help="File to wrap (default: stdin)")
    parser.add_argument("--width", type=int, default=None, help="Wrap width in cells (default: $PI_WRAP_WIDTH or 80)")
    parser.add_argument("--tab-width", type=int, default=None, help="Tab stop distance in cells")
    parser.add_argument("--numbers", action="store_true", help="Prefix each line with offset:length")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    from pi.wrap.config import WrapConfig
    from pi.wrap.content import PlainTextContent
    from pi.wrap.wrapped import WrappedContent

    config = WrapConfig.from_env()
    if args.width is not None:
        config.width = args.width
    if args.tab_width is not None:
        config.tab_width = args.tab_width

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    wrapped = WrappedContent(PlainTextContent(text), config=config)
    wrapped.wrap_all(config.width)

    for i in range(wrapped.line_count()):
        line = wrapped.line_text(i)
        if args.numbers:
            offset = wrapped.offset_at_line(i)
            print(f"{offset}:{len(line)}\t{line}")
        else:
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
