from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from bs4 import BeautifulSoup
from dotenv import load_dotenv

from pagetext.config import ConfigError, ExtractorConfig, load_config
from pagetext.extractor import TextExtractor
from pagetext.scope import SelectorSyntaxError


log = logging.getLogger("pagetext.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pagetext")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Print the plain text of HTML files (stdin when none given)")
    extract.add_argument("files", nargs="*", type=Path)
    extract.add_argument("--config", type=Path, default=None)
    extract.add_argument("--include", action="append", metavar="PATTERN", help="CSS selector scoping the text")
    extract.add_argument("--exclude", action="append", metavar="TAG", help="Tag whose subtree is skipped")
    extract.add_argument("--max-size", type=int, default=None, help="Stop after this many characters")
    extract.add_argument("--no-text", action="store_true", default=None)
    extract.add_argument("--parser", default="html.parser", help="BeautifulSoup tree builder")

    cfg = sub.add_parser("config", help="Print the resolved extraction settings")
    cfg.add_argument("--config", type=Path, default=None)

    return parser


def _resolve_config(path: Optional[Path]) -> ExtractorConfig:
    if path is None:
        raw = (os.getenv("PAGETEXT_CONFIG", "") or "").strip()
        if not raw:
            return ExtractorConfig()
        path = Path(raw)
    log.debug("Loading config: %s", path)
    return load_config(path)


def _read_inputs(files: list[Path]) -> list[tuple[str, str]]:
    if not files:
        return [("<stdin>", sys.stdin.read())]
    out: list[tuple[str, str]] = []
    for path in files:
        try:
            out.append((str(path), path.read_text(encoding="utf-8", errors="replace")))
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
    return out


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    load_dotenv()

    try:
        config = _resolve_config(args.config)

        if args.command == "config":
            print(yaml.safe_dump(config.to_mapping(), sort_keys=False), end="")
            return 0

        if args.command == "extract":
            config = config.with_overrides(
                include_patterns=args.include,
                exclude_tags=args.exclude,
                max_text_size=args.max_size,
                no_text=args.no_text,
            )
            extractor = TextExtractor(config)
            texts = []
            for name, html in _read_inputs(args.files):
                log.debug("Extracting: %s", name)
                texts.append(extractor.extract(BeautifulSoup(html, args.parser)))
            print("\n\n".join(texts))
            return 0
    except ConfigError as e:
        logging.error("%s", e)
        return 1
    except SelectorSyntaxError as e:
        logging.error("Invalid include pattern: %s", e)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2
