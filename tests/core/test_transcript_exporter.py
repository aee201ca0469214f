"""
Test suite for TranscriptExporter.

Uses an in-memory fake of the Notion record client so idempotence can be
checked by counting the records that actually exist.

System role: Verification of idempotent transcript export
"""

from unittest.mock import AsyncMock

import pytest

from concierge.boundary.recordkeeping.notion_records import TranscriptRecord
from concierge.core.exceptions import RecordkeepingError, SessionNotFoundError, ValidationError
from concierge.core.export.chat_log_ledger import ChatLogLedger
from concierge.core.export.transcript_exporter import TranscriptExporter, build_conversation_blocks
from concierge.core.session.session_store import SessionStore
from concierge.models.session import Message


class FakeRecordClient:
    """In-memory stand-in for NotionRecordClient."""

    def __init__(self) -> None:
        self.pages: dict[str, TranscriptRecord] = {}
        self.fail_queries: set[str] = set()

    async def find_turn_records(self, date: str, time: str, query: str) -> list[dict]:
        return [
            {"id": page_id}
            for page_id, record in self.pages.items()
            if (record.date, record.time, record.query) == (date, time, query)
        ]

    async def find_conversation_record(self, contact_info: str, date: str) -> dict | None:
        for page_id, record in self.pages.items():
            if (record.contact_info, record.date) == (contact_info, date):
                return {"id": page_id}
        return None

    async def create_record(self, record: TranscriptRecord) -> str:
        if record.query in self.fail_queries:
            raise RecordkeepingError("Notion create failed: validation_error")
        page_id = f"page-{len(self.pages) + 1}"
        self.pages[page_id] = record
        return page_id

    async def update_record(self, page_id: str, record: TranscriptRecord) -> str:
        self.pages[page_id] = record
        return page_id


@pytest.fixture
def records() -> FakeRecordClient:
    """Provide fake record client."""
    return FakeRecordClient()


@pytest.fixture
def sleep() -> AsyncMock:
    """Provide a sleep mock so pacing never waits."""
    return AsyncMock()


@pytest.fixture
def exporter(records, ledger: ChatLogLedger, session_store: SessionStore, sleep, utc_clock) -> TranscriptExporter:
    """Provide exporter pausing after every 2 creates."""
    return TranscriptExporter(
        records=records,
        ledger=ledger,
        sessions=session_store,
        pause_every=2,
        pause_seconds=1.0,
        sleep=sleep,
        clock=utc_clock,
    )


async def _record_turns(ledger: ChatLogLedger, utc_clock, count: int) -> list[str]:
    ids = []
    for i in range(count):
        log = await ledger.record_turn(f"s{i}", f"question {i}", f"answer {i}", 100.0)
        ids.append(log.id)
        utc_clock.advance(seconds=1)
    return ids


class TestExportDay:
    """Test suite for per-turn export."""

    @pytest.mark.asyncio
    async def test_rerun_should_not_duplicate_records(
        self, exporter: TranscriptExporter, ledger: ChatLogLedger, records, utc_clock
    ) -> None:
        """Test two passes produce one record per log; the second reports skips."""
        # Arrange
        await _record_turns(ledger, utc_clock, 3)

        # Act
        first = await exporter.export_day("2025-06-15")
        second = await exporter.export_day("2025-06-15")

        # Assert
        assert (first.success, first.skipped, first.errors) == (3, 0, 0)
        assert (second.success, second.skipped, second.errors) == (0, 3, 0)
        assert len(records.pages) == 3

    @pytest.mark.asyncio
    async def test_existing_remote_record_should_be_flagged_and_skipped(
        self, exporter: TranscriptExporter, ledger: ChatLogLedger, records
    ) -> None:
        """Test a record already present remotely is not created again."""
        log = await ledger.record_turn("s1", "question", "answer", 10.0)
        records.pages["page-x"] = TranscriptRecord(
            date=log.date, time=log.time, query=log.query, response=log.response
        )

        result = await exporter.export_day(log.date)

        assert (result.success, result.skipped) == (0, 1)
        assert await ledger.is_exported(log.id) is True
        assert len(records.pages) == 1

    @pytest.mark.asyncio
    async def test_should_pause_every_two_successes(
        self, exporter: TranscriptExporter, ledger: ChatLogLedger, utc_clock, sleep: AsyncMock
    ) -> None:
        """Test pacing after every second create."""
        await _record_turns(ledger, utc_clock, 5)

        await exporter.export_day("2025-06-15")

        assert sleep.await_count == 2
        sleep.assert_awaited_with(1.0)

    @pytest.mark.asyncio
    async def test_single_failure_should_not_abort_batch(
        self, exporter: TranscriptExporter, ledger: ChatLogLedger, records, utc_clock
    ) -> None:
        """Test one failing log is counted while the rest export."""
        await _record_turns(ledger, utc_clock, 3)
        records.fail_queries.add("question 1")

        result = await exporter.export_day("2025-06-15")

        assert (result.success, result.errors) == (2, 1)
        assert len(result.error_details) == 1
        assert "validation_error" in result.error_details[0]

    @pytest.mark.asyncio
    async def test_expired_log_should_be_skipped(
        self, exporter: TranscriptExporter, ledger: ChatLogLedger, kv_store
    ) -> None:
        """Test an indexed id whose log is gone counts as skipped."""
        log = await ledger.record_turn("s1", "q", "a", 1.0)
        await kv_store.delete(f"log:{log.id}")

        result = await exporter.export_day(log.date)

        assert (result.success, result.skipped) == (0, 1)

    @pytest.mark.asyncio
    async def test_empty_day_should_report_zero(self, exporter: TranscriptExporter) -> None:
        """Test a day without logs exports nothing."""
        result = await exporter.export_day("2024-01-01")

        assert (result.success, result.skipped, result.errors) == (0, 0, 0)


class TestExportConversation:
    """Test suite for conversation-level export."""

    async def _session_with_turns(self, session_store: SessionStore, contact: str, turns: int) -> str:
        session_id = await session_store.create_session("192.0.2.1")
        for i in range(1, turns + 1):
            await session_store.add_message(session_id, Message(role="user", content=f"q{i}"))
            await session_store.add_message(session_id, Message(role="assistant", content=f"a{i}"))
        await session_store.set_contact_info(session_id, contact)
        return session_id

    @pytest.mark.asyncio
    async def test_second_export_same_contact_and_day_should_patch(
        self, exporter: TranscriptExporter, session_store: SessionStore, records
    ) -> None:
        """Test one record per (contact, day): the second export updates it."""
        session_id = await self._session_with_turns(session_store, "guest@example.com", 1)

        first = await exporter.export_conversation(session_id)
        await session_store.add_message(session_id, Message(role="user", content="q2"))
        second = await exporter.export_conversation(session_id)

        assert first.action == "created"
        assert second.action == "updated"
        assert second.record_id == first.record_id
        assert len(records.pages) == 1
        assert "Question 2: q2" in records.pages[first.record_id].query

    @pytest.mark.asyncio
    async def test_different_contact_or_day_should_create_new_records(
        self, exporter: TranscriptExporter, session_store: SessionStore, records, utc_clock
    ) -> None:
        """Test differing contact or day produce separate records."""
        first_id = await self._session_with_turns(session_store, "a@example.com", 1)
        second_id = await self._session_with_turns(session_store, "b@example.com", 1)

        await exporter.export_conversation(first_id)
        await exporter.export_conversation(second_id)
        utc_clock.advance(days=1)
        await exporter.export_conversation(first_id)

        assert len(records.pages) == 3

    @pytest.mark.asyncio
    async def test_missing_session_should_raise(self, exporter: TranscriptExporter) -> None:
        """Test exporting an unknown session fails clearly."""
        with pytest.raises(SessionNotFoundError):
            await exporter.export_conversation("ghost")

    @pytest.mark.asyncio
    async def test_session_without_contact_should_raise(
        self, exporter: TranscriptExporter, session_store: SessionStore
    ) -> None:
        """Test conversation export requires contact info."""
        session_id = await session_store.create_session()

        with pytest.raises(ValidationError):
            await exporter.export_conversation(session_id)

    @pytest.mark.asyncio
    async def test_blocks_should_number_questions_and_answers(self, session_store: SessionStore) -> None:
        """Test Question N / Answer N folding."""
        session_id = await self._session_with_turns(session_store, "guest@example.com", 2)
        session = await session_store.get_session(session_id)

        questions, answers, turns = build_conversation_blocks(session)

        assert questions == "Question 1: q1\n\nQuestion 2: q2"
        assert answers == "Answer 1: a1\n\nAnswer 2: a2"
        assert turns == 2
