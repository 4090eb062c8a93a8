"""
Tests for front matter splitting, parsing and serialization.
"""

import pytest

from inkwell.core.models.article import ArticleFrontMatter
from inkwell.core.services.front_matter import (
    FrontMatterError,
    FrontMatterSplitError,
    dump_front_matter,
    parse_front_matter,
    split_article,
    split_front_matter,
)


class TestSplitFrontMatter:
    def test_three_parts_is_jekyll(self):
        front, body = split_front_matter("A---B---C")
        assert front == "B"
        assert body == "C"

    def test_leading_delimiter_counts_as_first_segment(self):
        front, body = split_front_matter("---A---B---C")
        assert front == "A"
        assert body == "B---C"

    def test_jekyll_layout(self):
        front, body = split_front_matter("---\ntitle: x\n---\nbody\n")
        assert front == "\ntitle: x\n"
        assert body == "\nbody"

    def test_two_parts_is_hexo(self):
        front, body = split_front_matter("title: x\n---\nbody")
        assert front == "title: x\n"
        assert body == "\nbody"

    def test_body_keeps_extra_rules(self):
        _front, body = split_front_matter("---\na: 1\n---\none\n---\ntwo")
        assert body == "\none\n---\ntwo"

    def test_surrounding_whitespace_is_trimmed(self):
        front, _body = split_front_matter("\n\n  ---\na: 1\n---\nbody  \n\n")
        assert front == "\na: 1\n"

    def test_no_delimiter_raises(self):
        with pytest.raises(FrontMatterSplitError):
            split_front_matter("just a body")


class TestSplitArticle:
    def test_header_first(self):
        front, body = split_article("title: x\n---\nbody\n")
        assert front == "title: x\n"
        assert body == "\nbody"

    def test_body_rules_kept(self):
        _front, body = split_article("title: x\n---\none\n\n---\n\ntwo")
        assert body == "\none\n\n---\n\ntwo"

    def test_delimiter_inside_value_ignored(self):
        front, body = split_article("title: A --- B\ndate: 2015-01-02\n\n---\n\nbody")
        assert parse_front_matter(front).title == "A --- B"
        assert body.strip() == "body"

    def test_leading_delimiter_is_jekyll(self):
        front, body = split_article("---\ntitle: x\n---\nbody\n---\nmore")
        assert front == "\ntitle: x\n"
        assert body == "\nbody\n---\nmore"

    def test_delimiter_with_trailing_spaces(self):
        front, _body = split_article("title: x\n---  \nbody")
        assert front == "title: x\n"

    def test_no_delimiter_line_raises(self):
        with pytest.raises(FrontMatterSplitError):
            split_article("title: a---b\nbody")


class TestParseFrontMatter:
    def test_full_header(self):
        fm = parse_front_matter(
            "title: Hello\ndate: 2015-01-02\nauthor: ink\n"
            "tags: [a, b]\ncategories: [c]\n"
        )
        assert fm.title == "Hello"
        assert fm.date == "2015-01-02"
        assert fm.author == "ink"
        assert fm.tags == ["a", "b"]
        assert fm.categories == ["c"]

    def test_timestamps_stay_literal(self):
        fm = parse_front_matter("date: 2015-01-02 03:04:05 +0800\n")
        assert fm.date == "2015-01-02 03:04:05 +0800"

    def test_single_string_tags(self):
        fm = parse_front_matter("tags: solo\n")
        assert fm.tags == ["solo"]

    def test_nested_categories_flattened(self):
        fm = parse_front_matter("categories:\n  - [a, b]\n  - c\n")
        assert fm.categories == ["a", "b", "c"]

    def test_numeric_title_coerced(self):
        fm = parse_front_matter("title: 2048\n")
        assert fm.title == "2048"

    def test_null_values(self):
        fm = parse_front_matter("title:\ntags:\n")
        assert fm.title == ""
        assert fm.tags == []

    def test_unknown_keys_ignored(self):
        fm = parse_front_matter("title: x\nlayout: post\npermalink: /x/\n")
        assert fm.title == "x"

    def test_empty_header(self):
        assert parse_front_matter("") == ArticleFrontMatter()

    def test_invalid_yaml(self):
        with pytest.raises(FrontMatterError, match="invalid YAML"):
            parse_front_matter("title: [unclosed\n")

    def test_non_mapping(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            parse_front_matter("- a\n- b\n")


class TestDumpFrontMatter:
    def test_field_order(self):
        text = dump_front_matter(ArticleFrontMatter(title="T", date="2015-01-02 00:00:00"))
        keys = [line.split(":", 1)[0] for line in text.splitlines() if not line.startswith(("-", " "))]
        assert keys == ["title", "date", "update", "author", "tags", "categories"]

    def test_dump_parses_back(self):
        original = ArticleFrontMatter(
            title="Héllo", date="2015-01-02 00:00:00", author="me", tags=["a", "b"],
        )
        assert parse_front_matter(dump_front_matter(original)) == original
