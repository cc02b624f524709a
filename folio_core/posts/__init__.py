"""Post module exports."""

from folio_core.posts.models import Post, PostFrontMatter
from folio_core.posts.parser import (
    PostParseError,
    build_tag_index,
    load_post,
    load_posts,
    parse_post,
    posts_with_tag,
    slugify,
    split_front_matter,
    summarize_posts,
)

__all__ = [
    "Post",
    "PostFrontMatter",
    "PostParseError",
    "build_tag_index",
    "load_post",
    "load_posts",
    "parse_post",
    "posts_with_tag",
    "slugify",
    "split_front_matter",
    "summarize_posts",
]
