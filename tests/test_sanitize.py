"""
Bookmarks API — Sanitizer Unit Tests
=====================================

What:  Tests for the XSS sanitization applied to outbound bookmarks.

What we test:
    ✅ Script tags are entity-escaped, surrounding text kept
    ✅ Event-handler attributes are dropped, benign inline markup kept
    ✅ Safe values pass through unchanged; None stays None
    ✅ URLs keep their query-string `&`, markup characters are escaped
    ✅ serialize_bookmark sanitizes text fields only
"""

import pytest
from unittest.mock import MagicMock

from bookmarks_api.services.sanitize import sanitize_text, sanitize_url, serialize_bookmark


class TestSanitizeText:

    def test_script_tag_is_escaped(self):
        assert sanitize_text("<script>alert(1)</script>") == "&lt;script&gt;alert(1)&lt;/script&gt;"

    def test_script_inside_text(self, malicious_bookmark, sanitized_malicious_fields):
        result = sanitize_text(malicious_bookmark["title"])
        assert result == sanitized_malicious_fields["title"]
        assert "<script>" not in result

    def test_onerror_attribute_removed(self, malicious_bookmark, sanitized_malicious_fields):
        result = sanitize_text(malicious_bookmark["description"])
        assert result == sanitized_malicious_fields["description"]
        assert "onerror" not in result

    def test_benign_markup_kept(self):
        assert sanitize_text("not <strong>all</strong> bad") == "not <strong>all</strong> bad"

    def test_unknown_tag_escaped_not_stripped(self):
        result = sanitize_text('<iframe src="https://evil.example"></iframe>')
        assert "<iframe" not in result
        assert "&lt;iframe" in result

    def test_javascript_href_removed(self):
        result = sanitize_text('<a href="javascript:alert(1)">click</a>')
        assert "javascript:" not in result
        assert "click" in result

    def test_plain_url_unchanged(self):
        assert sanitize_text("https://www.firefox.com") == "https://www.firefox.com"

    def test_none_passes_through(self):
        assert sanitize_text(None) is None


class TestSanitizeUrl:

    @pytest.mark.parametrize("url", [
        "https://www.google.com/search?q=python&hl=en",
        "https://example.com/a?x=1&y=2&z=3#top",
        "https://www.firefox.com",
    ])
    def test_safe_url_unchanged(self, url):
        assert sanitize_url(url) == url

    def test_markup_characters_escaped(self):
        result = sanitize_url('https://x.test/"><script>alert(1)</script>')
        assert result == "https://x.test/&quot;&gt;&lt;script&gt;alert(1)&lt;/script&gt;"

    def test_none_passes_through(self):
        assert sanitize_url(None) is None


class TestSerializeBookmark:

    def _row(self, **fields):
        row = MagicMock()
        row.id = fields.get("id", 1)
        row.title = fields.get("title", "Title")
        row.url = fields.get("url", "https://example.com")
        row.description = fields.get("description")
        row.rating = fields.get("rating", 3)
        return row

    def test_text_fields_are_sanitized(self, malicious_bookmark, sanitized_malicious_fields):
        result = serialize_bookmark(self._row(**malicious_bookmark))

        assert result.id == 18
        assert result.title == sanitized_malicious_fields["title"]
        assert result.url == sanitized_malicious_fields["url"]
        assert result.description == sanitized_malicious_fields["description"]
        assert result.rating == 5

    def test_missing_description_stays_null(self):
        result = serialize_bookmark(self._row(description=None))
        assert result.description is None
        assert result.model_dump()["description"] is None

    def test_query_string_url_is_not_entity_escaped(self):
        url = "https://www.google.com/search?q=python&hl=en"
        result = serialize_bookmark(self._row(url=url))
        assert result.url == url
