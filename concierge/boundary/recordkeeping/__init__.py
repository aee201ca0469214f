"""
Recordkeeping boundary layer.

Notion database adapter used by the transcript exporter.
"""

from concierge.boundary.recordkeeping.notion_records import (
    NotionRecordClient,
    TranscriptRecord,
)

__all__ = ["NotionRecordClient", "TranscriptRecord"]
