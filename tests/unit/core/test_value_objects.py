"""Unit tests for core value objects."""
from __future__ import annotations

import pytest

from backend.src.core.value_objects.profile_link import ProfileLink, normalize_links
from backend.src.core.value_objects.stored_file import StoredFile


class TestProfileLink:
    """Tests for ProfileLink value object."""

    def test_strips_url_and_blank_title(self):
        link = ProfileLink(url="  https://example.com  ", title="   ")
        assert link.url == "https://example.com"
        assert link.title is None

    def test_blank_url_rejected(self):
        with pytest.raises(ValueError):
            ProfileLink(url="   ")

    def test_immutable(self):
        link = ProfileLink(url="https://example.com")
        with pytest.raises(AttributeError):
            link.url = "https://other.com"  # type: ignore[misc]

    def test_from_plain_string(self):
        link = ProfileLink.from_raw("https://github.com/alice")
        assert link == ProfileLink(url="https://github.com/alice")

    def test_from_mapping(self):
        link = ProfileLink.from_raw({"title": "Portfolio", "url": "https://alice.dev"})
        assert link.title == "Portfolio"
        assert link.url == "https://alice.dev"

    def test_from_blank_inputs(self):
        assert ProfileLink.from_raw(None) is None
        assert ProfileLink.from_raw("  ") is None
        assert ProfileLink.from_raw({"title": "Empty", "url": ""}) is None

    def test_from_unsupported_type(self):
        with pytest.raises(ValueError):
            ProfileLink.from_raw(42)  # type: ignore[arg-type]

    def test_to_dict_omits_missing_title(self):
        assert ProfileLink(url="https://a.io").to_dict() == {"url": "https://a.io"}
        assert ProfileLink(url="https://a.io", title="A").to_dict() == {"url": "https://a.io", "title": "A"}


class TestNormalizeLinks:
    """Tests for mixed link normalization."""

    def test_mixed_shapes_become_one_shape(self):
        links = normalize_links([
            "https://x.com/alice",
            {"title": "CV", "url": "https://cv.io"},
            "",
            {"url": "   "},
            None,
        ])
        assert links == [
            ProfileLink(url="https://x.com/alice"),
            ProfileLink(url="https://cv.io", title="CV"),
        ]

    def test_none_gives_empty_list(self):
        assert normalize_links(None) == []


class TestStoredFile:
    def test_to_dict(self):
        stored = StoredFile(path="A1/cv.pdf", url="/uploads/A1/cv.pdf")
        assert stored.to_dict() == {"path": "A1/cv.pdf", "url": "/uploads/A1/cv.pdf"}
