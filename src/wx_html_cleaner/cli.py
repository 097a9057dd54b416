"""Command-line interface for wx-html-cleaner."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from wx_html_cleaner.batch import SourceError, clean_documents, read_source
from wx_html_cleaner.cleaner import clean
from wx_html_cleaner.config import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wx-html-cleaner",
        description="Strip saved web articles down to readable, minimal HTML.",
    )
    parser.add_argument(
        "sources",
        nargs="+",
        help="HTML files (or http/https URLs) to clean",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for cleaned files (default: next to each source)",
    )
    parser.add_argument(
        "--parser",
        choices=["lxml", "html.parser"],
        default=None,
        help="BeautifulSoup tree builder to try first (default: from .env CLEANER_PARSER, else lxml)",
    )
    parser.add_argument(
        "--suffix",
        default=None,
        help="Suffix appended to the title-derived file name (default: _clean.html)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the cleaned HTML of a single source instead of writing a file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the per-document report as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = Settings.from_env()

    # Apply CLI overrides
    overrides = {}
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.parser is not None:
        overrides["parser"] = args.parser
    if args.suffix is not None:
        overrides["suffix"] = args.suffix
    if overrides:
        settings = replace(settings, **overrides)

    if args.stdout:
        if len(args.sources) != 1:
            parser.error("--stdout takes exactly one source")
        try:
            raw = read_source(args.sources[0], settings)
        except SourceError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(clean(raw, parser=settings.parser))
        return 0

    report = clean_documents(args.sources, settings)

    if args.json:
        print(report.model_dump_json(indent=2))

    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
