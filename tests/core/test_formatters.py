"""
Test suite for CMS document formatters.

Covers totality on missing fields, determinism, portable text flattening,
label mapping, metadata extraction and validity rules.

System role: Verification of the ETL transform step
"""

import pytest

from concierge.core.content_sync.formatters import (
    FORMATTERS,
    build_metadata,
    extract_portable_text,
    format_content,
    format_document,
    has_enough_content,
    is_valid_content,
)


def _block(*texts: str) -> dict:
    return {"_type": "block", "children": [{"_type": "span", "text": t} for t in texts]}


class TestFormatContent:
    """Test suite for per-type formatting."""

    def test_course_without_price_should_render_empty_segment(self, sample_courses) -> None:
        """Test a missing optional field renders as an empty string."""
        # Act
        text = format_content(sample_courses[1], "course")

        # Assert
        assert "Price: \n" in text
        assert "None" not in text
        assert "undefined" not in text

    def test_course_with_price_should_render_value(self, sample_courses) -> None:
        """Test present fields are rendered with their labels."""
        text = format_content(sample_courses[0], "course")

        assert text.splitlines() == [
            "Course: Kinesiology Basics",
            "Description: An introduction to muscle testing and balancing techniques.",
            "Duration: 6 hours",
            "Price: 25000",
            "Level: beginner",
        ]

    @pytest.mark.parametrize("content_type", sorted(FORMATTERS))
    def test_empty_document_should_never_raise(self, content_type: str) -> None:
        """Test every formatter is total over an empty document."""
        text = format_content({}, content_type)

        assert isinstance(text, str)
        assert "None" not in text

    def test_formatting_should_be_deterministic(self, sample_courses) -> None:
        """Test formatting twice yields byte-identical output."""
        first = [format_document(doc, "course") for doc in sample_courses]
        second = [format_document(doc, "course") for doc in sample_courses]

        assert first == second

    def test_event_should_map_labels_and_defaults(self) -> None:
        """Test event status/category labels and Free/Unlimited defaults."""
        event = {
            "title": "Open Day",
            "status": "open",
            "category": "workshop",
            "startDate": "2025-07-01T10:00:00Z",
            "description": [_block("Meet the ", "team.")],
            "tags": ["intro", "free"],
        }

        text = format_content(event, "event")

        assert "Status: Open for registration" in text
        assert "Category: Workshop" in text
        assert "Fee: Free" in text
        assert "Capacity: Unlimited" in text
        assert "Starts: 2025-07-01 10:00" in text
        assert "Description: Meet the team." in text
        assert "Tags: intro, free" in text

    def test_event_with_unparseable_date_should_keep_raw_value(self) -> None:
        """Test invalid dates are rendered as given."""
        text = format_content({"title": "X", "startDate": "next spring"}, "event")

        assert "Starts: next spring" in text

    def test_unknown_type_should_fall_back_to_sorted_json(self) -> None:
        """Test unknown types render as stable JSON."""
        text = format_content({"b": 1, "a": "x"}, "mystery")

        assert text == '{"a": "x", "b": 1}'


class TestPortableText:
    """Test suite for portable text flattening."""

    def test_blocks_should_join_children_and_lines(self) -> None:
        """Test children are concatenated and blocks separated by newlines."""
        content = [_block("Hello ", "world"), {"_type": "image"}, _block("Second")]

        assert extract_portable_text(content) == "Hello world\nSecond"

    def test_non_list_should_return_empty_string(self) -> None:
        """Test non-list content is treated as empty."""
        assert extract_portable_text(None) == ""
        assert extract_portable_text("plain") == ""


class TestMetadata:
    """Test suite for metadata extraction."""

    def test_metadata_should_use_title_then_name_then_question(self) -> None:
        """Test title fallback order."""
        assert build_metadata({"_id": "1", "name": "Aiko"}, "instructor").title == "Aiko"
        assert build_metadata({"_id": "2", "question": "Hours?"}, "faq").title == "Hours?"

    def test_metadata_should_extract_slug_and_updated_at(self, sample_courses) -> None:
        """Test slug.current and _updatedAt are copied."""
        metadata = build_metadata(sample_courses[0], "course")

        assert metadata.id == "course-1"
        assert metadata.type == "course"
        assert metadata.slug == "kinesiology-basics"
        assert metadata.updated_at == "2025-05-01T10:00:00Z"


class TestValidity:
    """Test suite for per-type validity rules."""

    @pytest.mark.parametrize(
        ("item", "content_type", "expected"),
        [
            ({"name": "Aiko", "bio": "Teaches kinesiology in Tokyo."}, "instructor", True),
            ({"name": "Aiko", "bio": "short"}, "instructor", False),
            ({"name": "Aiko", "specialties": ["Touch for Health"]}, "instructor", True),
            ({"question": "Hours?", "answer": "9-17"}, "faq", True),
            ({"question": "Hours?", "answer": "  "}, "faq", False),
            ({"name": "Latte", "price": 0}, "menuItem", True),
            ({"name": "Latte"}, "menuItem", False),
            ({"title": "Post", "excerpt": "..."}, "blogPost", True),
            ({"title": "Post"}, "news", False),
            ({"title": "Course", "description": "Desc"}, "course", True),
            ({"title": "Course"}, "course", False),
            ({"name": "Cafe"}, "shopInfo", True),
            ({"title": "About"}, "aboutPage", True),
            ({}, "page", False),
            ("not a dict", "page", False),
        ],
    )
    def test_is_valid_content(self, item, content_type: str, expected: bool) -> None:
        """Test validity decisions per content type."""
        assert is_valid_content(item, content_type) is expected

    def test_short_text_should_not_have_enough_content(self) -> None:
        """Test the minimum length threshold is exclusive at 50 characters."""
        assert has_enough_content("x" * 50) is False
        assert has_enough_content("  " + "x" * 51 + "  ") is True
