#!/usr/bin/env python3
"""
CLI script to generate interface stubs from cached reference-manual pages.

Reads every HTML page in a cache directory (or only the pages linked from an
index page), runs Extractor → Reconciler → Emitter on each, and writes one
stub file per page.

Warnings (missing sections, undocumented or unused names) are logged but do
not change the exit status. A malformed page is skipped unless --strict.
"""

import argparse
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from sml_stubgen.config import load_config
from sml_stubgen.exceptions import StubgenError
from sml_stubgen.logger import setup_logger
from sml_stubgen.main import StubGenerator
from sml_stubgen.page_store import PageStore
from sml_stubgen.schemas import SelectorList


def main():
    parser = argparse.ArgumentParser(description="Generate SML stubs from reference-manual HTML")
    parser.add_argument("cache_dir", help="Directory of cached HTML pages")
    parser.add_argument("--output", "-o", default="sml", help="Output directory (default: sml)")
    parser.add_argument("--index", help="Index page in the cache; only pages it links are processed")
    parser.add_argument("--selector", action="append", default=[],
                        help="CSS selector for index links (repeatable)")
    parser.add_argument("--xpath", action="append", default=[],
                        help="XPath for index links (repeatable)")
    parser.add_argument("--no-comments", action="store_true", help="Omit (*! ... *) comments")
    parser.add_argument("--strict", action="store_true", help="Stop at the first malformed page")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args = parser.parse_args()

    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        config = load_config(
            emit_comments=False if args.no_comments else None,
            strict=True if args.strict else None,
        )
        store = PageStore(args.cache_dir, output_suffix=config.output_suffix)
        selectors = SelectorList(css=args.selector, xpath=args.xpath)
        if args.index and selectors.is_empty():
            # Standard Basis manual layout: one <h4><a> per page
            selectors.css.append("h4 a")
        pages = store.read_pages(index_name=args.index, selectors=selectors)

        generator = StubGenerator(config=config)
        batch = generator.process_pages(pages)
        store.write_stubs(batch.stubs, args.output)
    except StubgenError as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    for stub in batch.stubs:
        if stub.warnings:
            print(f"  ✓ {stub.name} ({len(stub.warnings)} warnings)")
        else:
            print(f"  ✓ {stub.name}")
    for name, error in batch.failures.items():
        print(f"  ✗ {name}: {error}")

    print(f"\nSaved {len(batch.stubs)} stubs to: {args.output}")


if __name__ == "__main__":
    main()
