"""
Content types mirrored from the CMS.

Dependencies: None
System role: ETL source configuration
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContentTypeQuery:
    """A CMS document type and the query selecting its documents."""

    type: str
    query: str


DEFAULT_CONTENT_TYPES: tuple[ContentTypeQuery, ...] = (
    ContentTypeQuery("shopInfo", '*[_type == "shopInfo"]'),
    ContentTypeQuery("menuItem", '*[_type == "menuItem"]'),
    ContentTypeQuery("blogPost", '*[_type == "blogPost"]'),
    ContentTypeQuery("event", '*[_type == "event" && useForAI == true]'),
    ContentTypeQuery("news", '*[_type == "news"]'),
    ContentTypeQuery("course", '*[_type == "course"]'),
    ContentTypeQuery("instructor", '*[_type == "instructor"]'),
    ContentTypeQuery("faq", '*[_type == "faq"]'),
    ContentTypeQuery("page", '*[_type == "page"]'),
    ContentTypeQuery("homepage", '*[_type == "homepage"]'),
    ContentTypeQuery("aboutPage", '*[_type == "aboutPage"]'),
    ContentTypeQuery("schoolPage", '*[_type == "schoolPage"]'),
    ContentTypeQuery("instructorPage", '*[_type == "instructorPage"]'),
)
