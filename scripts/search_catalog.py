#!/usr/bin/env python3
"""
search_catalog.py — command-line product search over a JSON catalog

Loads a catalog (JSON array of product objects), runs one keyword search
in the chosen mode and prints the hits as "ItemNo : name".

Usage:
  python scripts/search_catalog.py products.json "ボルト M8" --mode fuzzy
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from fuzzalign.catalog import SEARCH_MODES, SEARCH_FUZZY, load_catalog, search_catalog
from fuzzalign.default import CATALOG_CONFIG, DEFAULT_CONFIG, DEFAULT_FIELDS, CODE_FIELD, NAME_FIELD
from fuzzalign.matcher import FuzzyMatcher


def main():
    parser = argparse.ArgumentParser(description='Search a JSON product catalog')
    parser.add_argument('catalog', type=Path, help='Path to the catalog JSON file')
    parser.add_argument('keyword', help='Search keyword (space separated tokens)')
    parser.add_argument('--mode', choices=SEARCH_MODES, default=SEARCH_FUZZY,
                        help='Search mode (default: fuzzy)')
    parser.add_argument('--threshold', type=float, default=0.6,
                        help='Minimum alignment ratio for fuzzy modes (default: 0.6)')
    parser.add_argument('--lcs', action='store_true',
                        help='Use plain LCS scoring instead of the catalog scoring')
    parser.add_argument('--time-budget', type=float, default=None,
                        help='Abort a fuzzy search after this many seconds')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    records = load_catalog(args.catalog)
    matcher = FuzzyMatcher(
        config=DEFAULT_CONFIG if args.lcs else CATALOG_CONFIG,
        threshold=args.threshold,
        fields=DEFAULT_FIELDS,
        time_budget=args.time_budget,
    )
    hits = search_catalog(records, args.keyword, mode=args.mode, matcher=matcher)

    for product in hits:
        print(f"{product.get(CODE_FIELD, '')} : {product.get(NAME_FIELD, '')}")
    print(f"{len(hits)} hit(s)")


if __name__ == '__main__':
    main()
