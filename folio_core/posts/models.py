"""
Data models for blog posts.

A post is a Markdown document with a YAML front-matter block. The models
normalize the handful of keys the site layouts rely on (layout, title,
subtitle, tags, image) and keep any other keys the site generator adds.
"""

import datetime as dt
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from folio_core.utils.constants import DEFAULT_LAYOUT


class PostFrontMatter(BaseModel):
    """
    Front-matter metadata of a post.

    Attributes:
        layout: Site layout used to render the post (default: "post")
        title: Post title (required, non-blank)
        subtitle: Optional subtitle shown under the title
        tags: Normalized tags (lowercase, stripped, unique, input order kept)
        image: Optional header image path or URL
        date: Optional publication date (overrides the filename date)
    """

    layout: str = Field(default=DEFAULT_LAYOUT, description="Site layout name")
    title: str = Field(description="Post title")
    subtitle: Optional[str] = Field(default=None, description="Post subtitle")
    tags: List[str] = Field(default_factory=list, description="Post tags")
    image: Optional[str] = Field(default=None, description="Header image")
    date: Optional[dt.date] = Field(default=None, description="Publication date")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        """Reject blank titles."""
        v = "" if v is None else str(v).strip()
        if not v:
            raise ValueError("title cannot be blank")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        """Accept datetimes and Jekyll-style "YYYY-MM-DD HH:MM:SS +ZZZZ" strings."""
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str) and len(v) > 10:
            return v[:10]
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> List[str]:
        """Accept a list or a comma/space separated string of tags."""
        if v is None:
            return []
        if isinstance(v, str):
            raw = v.replace(",", " ").split()
        elif isinstance(v, (list, tuple, set)):
            raw = [str(t) for t in v if t is not None]
        else:
            raise ValueError(f"tags must be a list or string, got {type(v).__name__}")

        tags: List[str] = []
        for tag in raw:
            tag = tag.strip().lower()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    @field_validator("layout")
    @classmethod
    def validate_layout(cls, v: str) -> str:
        v = str(v).strip()
        return v or DEFAULT_LAYOUT

    model_config = ConfigDict(extra="allow")


class Post(BaseModel):
    """
    A parsed post: front matter plus Markdown body.

    Attributes:
        front_matter: Validated front-matter metadata
        body: Markdown body (everything after the front-matter block)
        source_path: File the post was read from, if any
        slug: URL slug (from filename, else derived from title)
        date: Publication date (front matter first, then filename)
    """

    front_matter: PostFrontMatter
    body: str = ""
    source_path: Optional[Path] = None
    slug: str
    date: Optional[dt.date] = None

    @property
    def title(self) -> str:
        return self.front_matter.title

    @property
    def tags(self) -> List[str]:
        return self.front_matter.tags

    @property
    def word_count(self) -> int:
        """Number of whitespace-separated words in the body."""
        return len(self.body.split())

    def has_tag(self, tag: str) -> bool:
        return tag.strip().lower() in self.front_matter.tags
