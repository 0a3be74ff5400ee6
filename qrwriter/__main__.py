"""Command line interface: ``python -m qrwriter TEXT OUTPUT``."""

from __future__ import annotations

import argparse
import logging
import sys

from .engine import QRCode
from .errors import QRWriterError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrwriter",
        description="Render text as a QR code image.",
    )
    parser.add_argument("text", help="payload to encode")
    parser.add_argument("output", help="output file; its extension picks the format")
    parser.add_argument("--format", dest="key", help="writer key overriding the extension")
    parser.add_argument("--size", type=int, default=300)
    parser.add_argument("--quiet-zone", type=int, default=0)
    parser.add_argument("--level", default="low", help="L, M, Q or H")
    parser.add_argument("--fg", default="#000000", help="foreground color")
    parser.add_argument("--bg", default="#ffffff", help="background color")
    parser.add_argument("--label")
    parser.add_argument("--label-font")
    parser.add_argument("--label-size", type=int)
    parser.add_argument("--label-align")
    parser.add_argument("--logo")
    parser.add_argument("--logo-size", type=int)
    parser.add_argument("--validate", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        qr = QRCode(
            args.text,
            size=args.size,
            quiet_zone=args.quiet_zone,
            error_correction_level=args.level,
            foreground_color=args.fg,
            background_color=args.bg,
            logo_path=args.logo,
            logo_size=args.logo_size,
            validate_result=args.validate,
        )
        if args.label is not None:
            qr.config.set_label(
                args.label,
                font_size=args.label_size,
                font_path=args.label_font,
                alignment=args.label_align,
            )
        qr.write_file(args.output, key=args.key)
    except QRWriterError as exc:
        logging.getLogger("qrwriter").error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
