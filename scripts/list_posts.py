#!/usr/bin/env python
"""
List the blog's posts from their front matter.

Example Usage:
    python scripts/list_posts.py
    python scripts/list_posts.py --tag trading
    python scripts/list_posts.py --tags
    python scripts/list_posts.py --posts-dir path/to/_posts --strict
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from folio_core.posts.parser import (
    PostParseError,
    build_tag_index,
    load_posts,
    posts_with_tag,
    summarize_posts,
)
from folio_core.utils import paths


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="List the blog's posts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--posts-dir",
        default=str(paths.POSTS_DIR),
        help=f"Directory holding the posts (default: {paths.POSTS_DIR})"
    )
    parser.add_argument("--tag", default=None, help="Only list posts carrying this tag")
    parser.add_argument("--tags", action="store_true", help="Print tag counts instead of posts")
    parser.add_argument("--strict", action="store_true", help="Fail on the first malformed post")
    parser.add_argument("--verbose", "-v", action="store_true", help="Print detailed output")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        posts = load_posts(args.posts_dir, strict=args.strict)

        if args.tags:
            index = build_tag_index(posts)
            print(f"\n{len(index)} tags across {len(posts)} posts:")
            for tag, tagged in index.items():
                print(f"  {tag:<24} {len(tagged)}")
            return 0

        if args.tag:
            posts = posts_with_tag(posts, args.tag)

        table = summarize_posts(posts)
        if table.empty:
            print("\nNo posts found.")
            return 0

        with pd.option_context("display.max_colwidth", 60, "display.width", 160):
            print(table.to_string(index=False))
        print(f"\n{len(table)} posts")
        return 0

    except FileNotFoundError as e:
        print(f"\n✗ Error: Posts directory not found", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1

    except PostParseError as e:
        print(f"\n✗ Error: Malformed post", file=sys.stderr)
        print(f"  {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
