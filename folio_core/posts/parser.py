"""
Post loading and indexing.

This module reads Markdown posts with YAML front matter, the layout a static
site generator expects under _posts/, and builds simple indexes over them
(tags, listing tables). Rendering and publishing are left to the site
generator.
"""

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd
import yaml
from pydantic import ValidationError

from folio_core.posts.models import Post, PostFrontMatter
from folio_core.utils.constants import (
    FRONT_MATTER_DELIMITER,
    FRONT_MATTER_END_DELIMITERS,
)

logger = logging.getLogger(__name__)

# Jekyll filename convention: 2021-03-14-some-slug.md
_FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


class PostParseError(ValueError):
    """Raised when a post's front matter cannot be parsed or validated."""


def slugify(text: str) -> str:
    """
    Turn a title into a URL slug.

    Example:
        >>> slugify("K-Means, Explained!")
        'k-means-explained'
    """
    return _SLUG_STRIP_RE.sub("-", text.lower()).strip("-")


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a post into its front-matter mapping and Markdown body.

    The front matter is the YAML block between an opening ``---`` line and
    the next ``---`` (or ``...``) line.

    Args:
        text: Full post text

    Returns:
        Tuple of (front-matter dict, body)

    Raises:
        PostParseError: If the block is missing, unterminated, not valid
            YAML, or not a mapping
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        raise PostParseError("Post must start with a '---' front-matter block")

    end_idx: Optional[int] = None
    for i in range(1, len(lines)):
        if lines[i].strip() in FRONT_MATTER_END_DELIMITERS:
            end_idx = i
            break

    if end_idx is None:
        raise PostParseError("Front-matter block is not terminated")

    raw = "".join(lines[1:end_idx])
    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise PostParseError(f"Invalid YAML in front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise PostParseError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )

    body = "".join(lines[end_idx + 1:]).lstrip("\n")
    return data, body


def _date_and_slug_from_filename(path: Path) -> Tuple[Optional[dt.date], Optional[str]]:
    match = _FILENAME_RE.match(path.stem)
    if not match:
        return None, None
    year, month, day, slug = match.groups()
    try:
        return dt.date(int(year), int(month), int(day)), slug
    except ValueError:
        logger.warning(f"Ignoring invalid date in filename: {path.name}")
        return None, slug


def parse_post(text: str, source_path: Optional[Union[str, Path]] = None) -> Post:
    """
    Parse a post from its text.

    Args:
        text: Full post text (front matter + body)
        source_path: Optional path, used for the Jekyll date and slug

    Returns:
        Parsed Post

    Raises:
        PostParseError: If front matter is malformed or fails validation

    Example:
        >>> post = parse_post("---\\ntitle: Hello\\ntags: [python]\\n---\\nBody")
        >>> post.slug
        'hello'
    """
    data, body = split_front_matter(text)

    try:
        front_matter = PostFrontMatter(**data)
    except ValidationError as e:
        where = f" in {source_path}" if source_path else ""
        raise PostParseError(f"Invalid front matter{where}: {e}") from e

    file_date: Optional[dt.date] = None
    slug: Optional[str] = None
    path = Path(source_path) if source_path is not None else None
    if path is not None:
        file_date, slug = _date_and_slug_from_filename(path)
        if slug is None:
            slug = path.stem

    if not slug:
        slug = slugify(front_matter.title)

    return Post(
        front_matter=front_matter,
        body=body,
        source_path=path,
        slug=slug,
        date=front_matter.date or file_date,
    )


def load_post(path: Union[str, Path]) -> Post:
    """
    Load a single post from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        PostParseError: If the post cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Post not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PostParseError(f"Post is not valid UTF-8: {path.name}") from e
    return parse_post(text, source_path=path)


def _sort_key(post: Post):
    # Newest first; undated posts go last
    ordinal = post.date.toordinal() if post.date else 0
    return (post.date is None, -ordinal, post.slug)


def load_posts(
    directory: Union[str, Path],
    pattern: str = "*.md",
    strict: bool = False,
) -> List[Post]:
    """
    Load every post in a directory.

    Args:
        directory: Directory holding post files (e.g. _posts/)
        pattern: Glob pattern for post files (default: "*.md")
        strict: If True, re-raise parse errors; otherwise skip bad posts
            with a warning

    Returns:
        Posts sorted newest first (undated posts last, then by slug)

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Posts directory not found: {directory}")

    posts = []
    for path in sorted(directory.glob(pattern)):
        try:
            posts.append(load_post(path))
        except PostParseError as e:
            if strict:
                raise
            logger.warning(f"Skipping {path.name}: {e}")

    logger.info(f"Loaded {len(posts)} posts from {directory}")
    return sorted(posts, key=_sort_key)


def build_tag_index(posts: List[Post]) -> Dict[str, List[Post]]:
    """
    Group posts by tag.

    Returns:
        Dict mapping tag to posts carrying it, tags sorted alphabetically
        and posts kept in input order
    """
    index: Dict[str, List[Post]] = {}
    for post in posts:
        for tag in post.tags:
            index.setdefault(tag, []).append(post)
    return dict(sorted(index.items()))


def posts_with_tag(posts: List[Post], tag: str) -> List[Post]:
    return [post for post in posts if post.has_tag(tag)]


def summarize_posts(posts: List[Post]) -> pd.DataFrame:
    """
    Build a listing table with one row per post.

    Returns:
        DataFrame with columns: date, slug, title, layout, tags, word_count
    """
    columns = ["date", "slug", "title", "layout", "tags", "word_count"]
    rows = [
        {
            "date": post.date,
            "slug": post.slug,
            "title": post.title,
            "layout": post.front_matter.layout,
            "tags": ", ".join(post.tags),
            "word_count": post.word_count,
        }
        for post in posts
    ]
    return pd.DataFrame(rows, columns=columns)
