"""
Per-turn chat log ledger.

Each completed turn is stored as log:{logId} (with retention TTL) and its
id is prepended to the per-day index logs:{date}. logId is
{date}_{time}_{sessionId} in UTC at seconds precision; a second turn from
the same session within one second gets a "-2", "-3", ... suffix. Export
flags live under log_exported:{logId}.

Dependencies: concierge.boundary.kv, concierge.models.export
System role: Durable queue of turns awaiting export
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from concierge.boundary.kv.base import KeyValueStore
from concierge.models.export import ChatLog

logger = logging.getLogger(__name__)

DEFAULT_LOG_TTL_SECONDS = 7 * 24 * 60 * 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def log_key(log_id: str) -> str:
    return f"log:{log_id}"


def day_index_key(date: str) -> str:
    return f"logs:{date}"


def exported_key(log_id: str) -> str:
    return f"log_exported:{log_id}"


class ChatLogLedger:
    """Write, read and flag per-turn chat logs."""

    def __init__(
        self,
        kv: KeyValueStore,
        ttl_seconds: int = DEFAULT_LOG_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.kv = kv
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def today(self) -> str:
        return self._clock().strftime("%Y-%m-%d")

    async def record_turn(
        self,
        session_id: str,
        query: str,
        response: str,
        processing_time_ms: float,
        client_identity: str | None = None,
        contact_info: str | None = None,
    ) -> ChatLog:
        """
        Persist one turn and index it under its UTC day.

        Args:
            session_id: Session the turn belongs to
            query: Visitor message
            response: Assistant reply
            processing_time_ms: Time spent producing the reply
            client_identity: Visitor identity (client IP)
            contact_info: Contact already known for the session

        Returns:
            ChatLog: The stored log
        """
        now = self._clock()
        date = now.strftime("%Y-%m-%d")
        time = now.strftime("%H:%M:%S")
        log_id = await self._unique_log_id(f"{date}_{time}_{session_id}")
        log = ChatLog(
            id=log_id,
            session_id=session_id,
            date=date,
            time=time,
            query=query,
            response=response,
            processing_time_ms=processing_time_ms,
            client_identity=client_identity,
            contact_info=contact_info,
        )
        await self.kv.set(log_key(log.id), log.model_dump_json(), self.ttl_seconds)
        await self.kv.list_push(day_index_key(date), log.id, self.ttl_seconds)
        logger.info(f"{__name__}:record_turn - Chat log created: {log.id}")
        return log

    async def _unique_log_id(self, base_id: str) -> str:
        log_id = base_id
        suffix = 1
        while await self.kv.get(log_key(log_id)) is not None:
            suffix += 1
            log_id = f"{base_id}-{suffix}"
        return log_id

    async def get_log(self, log_id: str) -> ChatLog | None:
        raw = await self.kv.get(log_key(log_id))
        if raw is None:
            return None
        return ChatLog.model_validate_json(raw)

    async def list_log_ids(self, date: str) -> list[str]:
        """Return the day's log ids, newest first."""
        return await self.kv.list_range(day_index_key(date), 0, -1)

    async def list_logs(self, date: str) -> list[ChatLog]:
        logs = []
        for log_id in await self.list_log_ids(date):
            log = await self.get_log(log_id)
            if log is not None:
                logs.append(log)
        return logs

    async def attach_contact(
        self,
        session_id: str,
        client_identity: str | None,
        contact: str,
        date: str | None = None,
    ) -> int:
        """
        Stamp contact info on the day's logs of a session or client.

        Args:
            session_id: Session whose logs should carry the contact
            client_identity: Logs from this client identity also match
            contact: Contact info to store
            date: Day to scan (default: today UTC)

        Returns:
            int: Number of logs updated
        """
        date = date or self.today()
        updated = 0
        for log_id in await self.list_log_ids(date):
            log = await self.get_log(log_id)
            if log is None:
                continue
            same_session = log.session_id == session_id
            same_client = client_identity is not None and log.client_identity == client_identity
            if same_session or same_client:
                log.contact_info = contact
                await self.kv.set(log_key(log_id), log.model_dump_json(), self.ttl_seconds)
                updated += 1

        logger.info(f"{__name__}:attach_contact - Updated {updated} logs for {date}")
        return updated

    async def is_exported(self, log_id: str) -> bool:
        return await self.kv.get(exported_key(log_id)) is not None

    async def mark_exported(self, log_id: str) -> None:
        await self.kv.set(exported_key(log_id), "true", self.ttl_seconds)
