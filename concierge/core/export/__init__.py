"""
Chat log ledger and transcript export.
"""

from concierge.core.export.chat_log_ledger import ChatLogLedger
from concierge.core.export.transcript_exporter import TranscriptExporter

__all__ = ["ChatLogLedger", "TranscriptExporter"]
