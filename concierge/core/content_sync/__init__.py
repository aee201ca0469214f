"""
CMS to retrieval store synchronization.
"""

from concierge.core.content_sync.content_types import DEFAULT_CONTENT_TYPES, ContentTypeQuery
from concierge.core.content_sync.synchronizer import ContentSynchronizer, build_sync_documents

__all__ = [
    "ContentSynchronizer",
    "ContentTypeQuery",
    "DEFAULT_CONTENT_TYPES",
    "build_sync_documents",
]
