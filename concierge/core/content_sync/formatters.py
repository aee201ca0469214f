"""
Per-type formatting of CMS documents into retrieval text.

Every function here is pure and total: missing or null fields render as
empty strings, and the same input always yields byte-identical output.

Dependencies: json, datetime
System role: ETL transform step
"""

import json
from collections.abc import Callable
from datetime import datetime
from typing import Any

from concierge.models.content import SyncMetadata

EVENT_STATUS_LABELS = {
    "open": "Open for registration",
    "full": "Fully booked",
    "closed": "Closed",
    "cancelled": "Cancelled",
}

EVENT_CATEGORY_LABELS = {
    "course": "Course",
    "session": "Session",
    "information": "Information session",
    "workshop": "Workshop",
    "other": "Other",
}

MIN_CONTENT_LENGTH = 50


def _get(item: Any, *path: str) -> Any:
    """Walk nested dict keys, returning None on any missing step."""
    current = item
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _join(values: Any, attr: str | None = None) -> str:
    if not isinstance(values, list):
        return ""
    parts = []
    for value in values:
        if attr is not None:
            value = _get(value, attr)
        if value:
            parts.append(_text(value))
    return ", ".join(parts)


def _nonblank(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def extract_portable_text(content: Any) -> str:
    """
    Flatten Sanity portable text into plain text.

    Args:
        content: List of portable text blocks (anything else yields "")

    Returns:
        str: Text of each block's children, one block per line
    """
    if not isinstance(content, list):
        return ""
    lines = []
    for block in content:
        if _get(block, "_type") != "block":
            continue
        children = _get(block, "children")
        if not isinstance(children, list):
            lines.append("")
            continue
        lines.append("".join(_text(_get(child, "text")) for child in children))
    return "\n".join(lines)


def _format_datetime(value: Any) -> str:
    if not value:
        return ""
    raw = _text(value)
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return raw


def _lines(*pairs: tuple[str, Any]) -> str:
    return "\n".join(f"{label}: {_text(value)}" for label, value in pairs)


def _shop_info(item: dict) -> str:
    return _lines(
        ("Cafe", item.get("name")),
        ("Description", item.get("description")),
        ("Hours", item.get("hours")),
        ("Location", item.get("location")),
        ("Address", item.get("address")),
        ("Phone", item.get("phone")),
    )


def _menu_item(item: dict) -> str:
    price = item.get("price")
    return _lines(
        ("Menu", item.get("name")),
        ("Category", item.get("category")),
        ("Price", f"¥{price}" if price is not None else ""),
        ("Description", item.get("description")),
        ("Ingredients", item.get("ingredients")),
    )


def _blog_post(item: dict) -> str:
    return _lines(
        ("Blog", item.get("title")),
        ("Excerpt", item.get("excerpt")),
        ("Content", extract_portable_text(item.get("content"))),
        ("Category", _get(item, "category", "title")),
    )


def _event(item: dict) -> str:
    status = item.get("status")
    category = item.get("category")
    fee = item.get("fee")
    capacity = item.get("capacity")
    return _lines(
        ("Event", item.get("title")),
        ("Category", EVENT_CATEGORY_LABELS.get(category, category) if isinstance(category, str) else category),
        ("Status", EVENT_STATUS_LABELS.get(status, status) if isinstance(status, str) else status),
        ("Starts", _format_datetime(item.get("startDate"))),
        ("Ends", _format_datetime(item.get("endDate"))),
        ("Venue", item.get("location")),
        ("Fee", f"¥{fee}" if fee else "Free"),
        ("Capacity", f"{capacity} people" if capacity else "Unlimited"),
        ("Current participants", f"{item.get('currentParticipants') or 0} people"),
        ("Description", extract_portable_text(item.get("description"))),
        ("Tags", _join(item.get("tags"))),
        ("Registration URL", item.get("registrationUrl")),
    )


def _news(item: dict) -> str:
    return _lines(
        ("News", item.get("title")),
        ("Content", item.get("content")),
        ("Date", item.get("publishedAt")),
    )


def _course(item: dict) -> str:
    return _lines(
        ("Course", item.get("title")),
        ("Description", item.get("description")),
        ("Duration", item.get("duration")),
        ("Price", item.get("price")),
        ("Level", item.get("level")),
    )


def _instructor(item: dict) -> str:
    return _lines(
        ("Instructor", item.get("name")),
        ("Specialties", _join(item.get("specialties"))),
        ("Biography", item.get("bio")),
        ("Region", item.get("region")),
        ("Details", item.get("profileDetails")),
        ("Website", item.get("website")),
        ("Email", item.get("email")),
    )


def _faq(item: dict) -> str:
    return _lines(
        ("FAQ", item.get("question")),
        ("Answer", item.get("answer")),
        ("Category", item.get("category")),
    )


def _page(item: dict) -> str:
    return _lines(
        ("Page", item.get("title")),
        ("Content", extract_portable_text(item.get("content"))),
        ("Summary", item.get("description")),
    )


def _homepage(item: dict) -> str:
    hero = " ".join(
        part for part in (_text(_get(item, "hero", "title")), _text(_get(item, "hero", "subtitle"))) if part
    )
    return _lines(
        ("Homepage", item.get("title")),
        ("Hero", hero),
        ("Summary", item.get("description")),
    )


def _about_page(item: dict) -> str:
    return _lines(
        ("About page", item.get("title")),
        ("Content", extract_portable_text(item.get("content"))),
        ("Mission", item.get("mission")),
    )


def _school_page(item: dict) -> str:
    return _lines(
        ("School page", item.get("title")),
        ("Description", item.get("description")),
        ("Features", _join(item.get("features"), "title")),
    )


def _instructor_page(item: dict) -> str:
    return _lines(
        ("Instructor page", item.get("title")),
        ("Description", item.get("description")),
        ("Content", extract_portable_text(item.get("content"))),
    )


FORMATTERS: dict[str, Callable[[dict], str]] = {
    "shopInfo": _shop_info,
    "menuItem": _menu_item,
    "blogPost": _blog_post,
    "event": _event,
    "news": _news,
    "course": _course,
    "instructor": _instructor,
    "faq": _faq,
    "page": _page,
    "homepage": _homepage,
    "aboutPage": _about_page,
    "schoolPage": _school_page,
    "instructorPage": _instructor_page,
}


def format_content(item: dict, content_type: str) -> str:
    """Render a document as retrieval text; unknown types become sorted JSON."""
    formatter = FORMATTERS.get(content_type)
    if formatter is None:
        return json.dumps(item, ensure_ascii=False, sort_keys=True, default=str)
    return formatter(item)


def build_metadata(item: dict, content_type: str) -> SyncMetadata:
    """Extract the metadata stored next to a document's vector."""
    title = item.get("title") or item.get("name") or item.get("question")
    return SyncMetadata(
        id=_text(item.get("_id")),
        type=content_type,
        title=_text(title),
        slug=_text(_get(item, "slug", "current")),
        updated_at=_text(item.get("_updatedAt")),
    )


def format_document(item: dict, content_type: str) -> tuple[str, SyncMetadata]:
    """
    Format one CMS document.

    Args:
        item: Raw CMS document
        content_type: Configured content type name

    Returns:
        tuple[str, SyncMetadata]: Retrieval text and metadata
    """
    return format_content(item, content_type), build_metadata(item, content_type)


def is_valid_content(item: Any, content_type: str) -> bool:
    """Decide whether a document carries enough data to be worth indexing."""
    if not isinstance(item, dict):
        return False

    if content_type == "instructor":
        specialties = item.get("specialties")
        has_specialties = isinstance(specialties, list) and any(_nonblank(s) for s in specialties)
        has_bio = _nonblank(item.get("bio")) and len(item["bio"].strip()) > 10
        has_details = (
            _nonblank(item.get("profileDetails")) and len(item["profileDetails"].strip()) > 10
        )
        return _nonblank(item.get("name")) and (has_specialties or has_bio or has_details)

    if content_type == "faq":
        return _nonblank(item.get("question")) and _nonblank(item.get("answer"))

    if content_type == "menuItem":
        return _nonblank(item.get("name")) and item.get("price") is not None

    if content_type in ("blogPost", "news", "event"):
        return _nonblank(item.get("title")) and bool(
            item.get("content") or item.get("description") or item.get("excerpt")
        )

    if content_type == "course":
        return _nonblank(item.get("title")) and _nonblank(item.get("description"))

    if content_type == "shopInfo":
        return _nonblank(item.get("name"))

    return _nonblank(item.get("title")) or _nonblank(item.get("name"))


def has_enough_content(text: str) -> bool:
    return len(text.strip()) > MIN_CONTENT_LENGTH
