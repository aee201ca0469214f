"""
Transcript exporter.

Writes chat transcripts to the external recordkeeping system in two modes:

- per-turn: walks one day's chat log index and creates one record per log,
  skipping logs already flagged and logs whose (date, time, query) already
  exists remotely, pausing after every few creates to stay under the
  recordkeeping API rate budget;
- conversation: folds a whole session into one Question/Answer record per
  (contact, day), patching the existing record when there is one.

A failure on one log is counted and reported; it never aborts the batch.

Dependencies: asyncio, concierge.boundary.recordkeeping, concierge.core.session
System role: Idempotent transcript export
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from concierge.boundary.recordkeeping.notion_records import NotionRecordClient, TranscriptRecord
from concierge.core.exceptions import SessionNotFoundError, ValidationError
from concierge.core.export.chat_log_ledger import ChatLogLedger
from concierge.core.session.session_store import SessionStore
from concierge.models.export import ChatLog, ConversationExportResult, ExportResult
from concierge.models.session import Session

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_conversation_blocks(session: Session) -> tuple[str, str, int]:
    """
    Fold a session into numbered question and answer blocks.

    Returns:
        tuple[str, str, int]: Questions block, answers block, number of questions
    """
    questions = [m.content for m in session.messages if m.role == "user"]
    answers = [m.content for m in session.messages if m.role == "assistant"]
    question_block = "\n\n".join(f"Question {i}: {text}" for i, text in enumerate(questions, 1))
    answer_block = "\n\n".join(f"Answer {i}: {text}" for i, text in enumerate(answers, 1))
    return question_block, answer_block, len(questions)


class TranscriptExporter:
    """Exports chat logs and conversations without creating duplicates."""

    def __init__(
        self,
        records: NotionRecordClient,
        ledger: ChatLogLedger,
        sessions: SessionStore,
        pause_every: int = 2,
        pause_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize exporter.

        Args:
            records: Recordkeeping client
            ledger: Chat log ledger holding per-turn logs and export flags
            sessions: Session store used for conversation exports
            pause_every: Pause after this many successful creates (0 disables)
            pause_seconds: Length of each pause
            sleep: Awaitable sleep used for pacing
            clock: Source of the current UTC time
        """
        self.records = records
        self.ledger = ledger
        self.sessions = sessions
        self.pause_every = pause_every
        self.pause_seconds = pause_seconds
        self._sleep = sleep
        self._clock = clock

    @staticmethod
    def _turn_record(log: ChatLog) -> TranscriptRecord:
        return TranscriptRecord(
            date=log.date,
            time=log.time,
            query=log.query,
            response=log.response,
            processing_time_ms=log.processing_time_ms,
            client_identity=log.client_identity,
            location=log.location,
            contact_info=log.contact_info,
        )

    async def export_day(self, date: str) -> ExportResult:
        """
        Export every chat log indexed under date.

        Safe to re-run: flagged or already-present logs are skipped.

        Args:
            date: Day in YYYY-MM-DD form

        Returns:
            ExportResult: success/skipped/errors counters and error details
        """
        result = ExportResult()
        log_ids = await self.ledger.list_log_ids(date)
        logger.info(f"{__name__}:export_day - Found {len(log_ids)} logs for {date}")

        for log_id in log_ids:
            try:
                if await self.ledger.is_exported(log_id):
                    result.skipped += 1
                    continue

                log = await self.ledger.get_log(log_id)
                if log is None:
                    result.skipped += 1
                    continue

                existing = await self.records.find_turn_records(log.date, log.time, log.query)
                if existing:
                    await self.ledger.mark_exported(log_id)
                    result.skipped += 1
                    logger.info(f"{__name__}:export_day - Already exported: {log_id}")
                    continue

                await self.records.create_record(self._turn_record(log))
                await self.ledger.mark_exported(log_id)
                result.success += 1
                logger.info(f"{__name__}:export_day - Exported log: {log_id}")

                if self.pause_every and result.success % self.pause_every == 0:
                    await self._sleep(self.pause_seconds)
            except Exception as e:
                result.errors += 1
                result.error_details.append(f"Log {log_id}: {e}")
                logger.error(f"{__name__}:export_day - Failed to export log {log_id}: {e}", exc_info=True)

        logger.info(
            f"{__name__}:export_day - {date}: success={result.success} "
            f"skipped={result.skipped} errors={result.errors}"
        )
        return result

    async def export_conversation(self, session_id: str) -> ConversationExportResult:
        """
        Export a whole session as one record per (contact, day).

        Raises:
            SessionNotFoundError: If the session does not exist
            ValidationError: If the session has no contact info or no questions
        """
        session = await self.sessions.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if not session.contact_info:
            raise ValidationError("Session has no contact info", field="contact")

        question_block, answer_block, turns = build_conversation_blocks(session)
        if turns == 0:
            raise ValidationError("Session has no questions to export", field="messages")

        now = self._clock()
        date = now.strftime("%Y-%m-%d")
        record = TranscriptRecord(
            date=date,
            time=now.strftime("%H:%M:%S"),
            query=question_block,
            response=answer_block,
            client_identity=session.client_identity,
            contact_info=session.contact_info,
        )

        existing = await self.records.find_conversation_record(session.contact_info, date)
        if existing:
            record_id = await self.records.update_record(existing["id"], record)
            action = "updated"
        else:
            record_id = await self.records.create_record(record)
            action = "created"

        logger.info(
            f"{__name__}:export_conversation - {action} record {record_id} "
            f"for session {session_id} ({turns} questions)"
        )
        return ConversationExportResult(
            record_id=record_id,
            action=action,
            contact_info=session.contact_info,
            date=date,
            turns=turns,
        )
