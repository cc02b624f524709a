"""Tests for post parsing and indexing."""

import datetime as dt

import pytest

from folio_core.posts.models import PostFrontMatter
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


class TestSplitFrontMatter:
    """Tests for front-matter extraction."""

    def test_basic_split(self):
        data, body = split_front_matter("---\ntitle: Hello\n---\nBody text\n")
        assert data == {"title": "Hello"}
        assert body == "Body text\n"

    def test_dot_terminator(self):
        data, body = split_front_matter("---\ntitle: Hello\n...\nBody")
        assert data["title"] == "Hello"
        assert body == "Body"

    def test_byte_order_mark_ignored(self):
        data, _ = split_front_matter("\ufeff---\ntitle: Hello\n---\n")
        assert data["title"] == "Hello"

    def test_empty_block_is_empty_dict(self):
        data, body = split_front_matter("---\n---\nBody")
        assert data == {}
        assert body == "Body"

    def test_missing_block_raises(self):
        with pytest.raises(PostParseError, match="must start with"):
            split_front_matter("# Just markdown\n")

    def test_unterminated_block_raises(self):
        with pytest.raises(PostParseError, match="not terminated"):
            split_front_matter("---\ntitle: Hello\nBody")

    def test_invalid_yaml_raises(self):
        with pytest.raises(PostParseError, match="Invalid YAML"):
            split_front_matter("---\ntitle: [unclosed\n---\n")

    def test_impossible_date_raises(self):
        with pytest.raises(PostParseError, match="Invalid YAML"):
            split_front_matter("---\ntitle: Hello\ndate: 2021-13-45\n---\n")

    def test_non_mapping_raises(self):
        with pytest.raises(PostParseError, match="must be a mapping"):
            split_front_matter("---\n- a\n- b\n---\n")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            split_front_matter("no front matter")


class TestFrontMatterModel:
    """Tests for PostFrontMatter normalization."""

    def test_defaults(self):
        fm = PostFrontMatter(title="Hello")
        assert fm.layout == "post"
        assert fm.tags == []
        assert fm.subtitle is None
        assert fm.date is None

    def test_tags_from_string(self):
        fm = PostFrontMatter(title="T", tags="Python, pandas  python")
        assert fm.tags == ["python", "pandas"]

    def test_tags_from_list_deduplicated(self):
        fm = PostFrontMatter(title="T", tags=["ML", " ml ", "Trading"])
        assert fm.tags == ["ml", "trading"]

    def test_numeric_title_coerced(self):
        assert PostFrontMatter(title=2021).title == "2021"

    def test_blank_title_rejected(self):
        with pytest.raises(ValueError):
            PostFrontMatter(title="   ")

    def test_jekyll_datetime_string(self):
        fm = PostFrontMatter(title="T", date="2021-03-14 10:00:00 +0000")
        assert fm.date == dt.date(2021, 3, 14)

    def test_blank_layout_defaults_to_post(self):
        assert PostFrontMatter(title="T", layout=" ").layout == "post"

    def test_extra_keys_kept(self):
        fm = PostFrontMatter(title="T", comments=True)
        assert fm.model_dump()["comments"] is True


class TestParsePost:
    """Tests for parse_post and slugs."""

    def test_slugify(self):
        assert slugify("K-Means, Explained!") == "k-means-explained"

    def test_slug_from_title_without_path(self):
        post = parse_post("---\ntitle: Hello World\n---\nBody")
        assert post.slug == "hello-world"
        assert post.date is None

    def test_date_and_slug_from_filename(self, tmp_path):
        post = parse_post(
            "---\ntitle: Cross\n---\nBody",
            source_path=tmp_path / "2021-03-14-golden-cross.md",
        )
        assert post.slug == "golden-cross"
        assert post.date == dt.date(2021, 3, 14)

    def test_front_matter_date_wins(self, tmp_path):
        post = parse_post(
            "---\ntitle: Cross\ndate: 2022-01-02\n---\nBody",
            source_path=tmp_path / "2021-03-14-golden-cross.md",
        )
        assert post.date == dt.date(2022, 1, 2)

    def test_word_count_and_tags(self):
        post = parse_post("---\ntitle: T\ntags: [Python]\n---\none two three")
        assert post.word_count == 3
        assert post.has_tag("PYTHON")
        assert not post.has_tag("ml")

    def test_missing_title_raises(self):
        with pytest.raises(PostParseError, match="Invalid front matter"):
            parse_post("---\nlayout: post\n---\nBody")


class TestLoadPosts:
    """Tests for loading a posts directory."""

    def test_load_post_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_post(tmp_path / "nope.md")

    def test_load_posts_skips_broken(self, posts_dir):
        posts = load_posts(posts_dir)
        assert [p.slug for p in posts] == ["golden-cross", "mortgage-cleaning"]

    def test_load_posts_strict_raises(self, posts_dir):
        with pytest.raises(PostParseError):
            load_posts(posts_dir, strict=True)

    def test_load_post_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin.md"
        path.write_bytes(b"---\ntitle: Caf\xe9\xff\n---\n")
        with pytest.raises(PostParseError, match="not valid UTF-8"):
            load_post(path)

    def test_load_posts_skips_bad_date_and_encoding(self, tmp_path):
        (tmp_path / "2021-01-01-good.md").write_text("---\ntitle: Good\n---\n", encoding="utf-8")
        (tmp_path / "bad-date.md").write_text(
            "---\ntitle: Bad\ndate: 2021-13-45\n---\n", encoding="utf-8"
        )
        (tmp_path / "bad-bytes.md").write_bytes(b"---\ntitle: \xff\n---\n")
        posts = load_posts(tmp_path)
        assert [p.slug for p in posts] == ["good"]

    def test_load_posts_missing_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Posts directory not found"):
            load_posts(tmp_path / "missing")

    def test_undated_posts_last(self, tmp_path):
        (tmp_path / "undated.md").write_text("---\ntitle: Undated\n---\n", encoding="utf-8")
        (tmp_path / "2020-01-01-old.md").write_text("---\ntitle: Old\n---\n", encoding="utf-8")
        (tmp_path / "2021-01-01-new.md").write_text("---\ntitle: New\n---\n", encoding="utf-8")
        posts = load_posts(tmp_path)
        assert [p.slug for p in posts] == ["new", "old", "undated"]


class TestPostIndexes:
    """Tests for tag index and listing table."""

    def test_build_tag_index(self, posts_dir):
        index = build_tag_index(load_posts(posts_dir))
        assert list(index) == ["cleaning", "pandas", "python", "trading"]
        assert [p.slug for p in index["trading"]] == ["golden-cross"]

    def test_posts_with_tag(self, posts_dir):
        posts = load_posts(posts_dir)
        assert [p.slug for p in posts_with_tag(posts, "Pandas")] == ["mortgage-cleaning"]

    def test_summarize_posts(self, posts_dir):
        table = summarize_posts(load_posts(posts_dir))
        assert list(table.columns) == ["date", "slug", "title", "layout", "tags", "word_count"]
        assert table.loc[0, "title"] == "The Golden Cross, Backtested"
        assert table.loc[1, "tags"] == "pandas, cleaning"

    def test_summarize_empty(self):
        table = summarize_posts([])
        assert table.empty
        assert "slug" in table.columns
