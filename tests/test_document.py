"""
Synchronize local documentation files with a ReadMe category.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import unittest
from pathlib import Path

from readme_docs.document import build_payload, compile_title_regex, extract_title, merged, slug_from_path
from readme_docs.environment import ContentError, TitleNotFoundError
from tests.utility import TypedTestCase


class TestSlug(TypedTestCase):
    def test_slug(self) -> None:
        self.assertEqual(slug_from_path(Path("My--File.md")), "my-file")
        self.assertEqual(slug_from_path(Path("docs/Getting-Started.md")), "getting-started")
        self.assertEqual(slug_from_path(Path(" Spaced .md")), "spaced")
        self.assertEqual(slug_from_path(Path("archive.tar.gz")), "archive.tar")
        self.assertEqual(slug_from_path(Path("README")), "readme")


class TestTitle(TypedTestCase):
    def test_first_group(self) -> None:
        regex = compile_title_regex(r"#\s*(.+)")
        self.assertEqual(extract_title("# Hello World  \nbody\n# Other", regex, Path("a.md")), "Hello World")

    def test_prefix(self) -> None:
        regex = compile_title_regex("#(.+)")
        self.assertEqual(extract_title("# Hello", regex, Path("a.md"), "Guide:"), "Guide: Hello")
        self.assertEqual(extract_title("# Hello", regex, Path("a.md"), ""), "Hello")

    def test_front_matter(self) -> None:
        regex = compile_title_regex(r"^title:\s*(.+)$")
        content = "---\ntitle: Front matter\n---\nbody"
        with self.assertRaises(TitleNotFoundError):
            # `^` and `$` match at string boundaries only
            extract_title(content, regex, Path("a.md"))

        regex = compile_title_regex(r"(?m)^title:\s*(.+)$")
        self.assertEqual(extract_title(content, regex, Path("a.md")), "Front matter")

    def test_no_match(self) -> None:
        regex = compile_title_regex("#(.+)")
        with self.assertRaises(TitleNotFoundError) as cm:
            extract_title("plain text", regex, Path("docs/plain.md"))
        self.assertIn("docs/plain.md", str(cm.exception))
        self.assertIn("#(.+)", str(cm.exception))

    def test_empty_group(self) -> None:
        regex = compile_title_regex("#(.+)?")
        with self.assertRaises(TitleNotFoundError):
            extract_title("#", regex, Path("a.md"))
        with self.assertRaises(TitleNotFoundError):
            extract_title("#   ", regex, Path("a.md"))

    def test_no_capture_group(self) -> None:
        regex = compile_title_regex("#.+")
        with self.assertRaises(TitleNotFoundError):
            extract_title("# Title", regex, Path("a.md"))

    def test_invalid_regex(self) -> None:
        with self.assertRaises(ContentError):
            compile_title_regex("#(.+")


class TestPayload(TypedTestCase):
    def test_merged(self) -> None:
        target = {"a": 1, "nested": {"x": 1, "y": 2}, "list": [1, 2]}
        source = {"b": 2, "nested": {"y": 3}, "list": [3]}
        self.assertEqual(merged(target, source), {"a": 1, "b": 2, "nested": {"x": 1, "y": 3}, "list": [3]})
        self.assertEqual(target, {"a": 1, "nested": {"x": 1, "y": 2}, "list": [1, 2]})

    def test_derived_fields_take_precedence(self) -> None:
        payload = build_payload(
            {"title": "X", "category": "Y", "hidden": True},
            title="Title",
            slug="slug",
            category_id="category",
            body="# Title",
        )
        self.assertEqual(payload, {"title": "Title", "slug": "slug", "category": "category", "body": "# Title", "hidden": True})

    def test_parent(self) -> None:
        payload = build_payload({"parentDoc": "other"}, title="T", slug="s", category_id="c", body="", parent_id="parent")
        self.assertEqual(payload["parentDoc"], "parent")


if __name__ == "__main__":
    unittest.main()
