"""
TTL-backed chat session store.

Sessions are JSON blobs under session:{id} in the key-value store. Every
read or write refreshes the TTL (sliding expiration); an expired session is
simply not found. A secondary session_contact:{contact} key maps a
visitor's contact info back to the session id with the same TTL.

Concurrent writers to one session are not serialized: the last full-blob
write wins.

Dependencies: concierge.boundary.kv, concierge.models.session
System role: Conversational state management
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from concierge.boundary.kv.base import KeyValueStore
from concierge.models.session import Message, Session

logger = logging.getLogger(__name__)

SESSION_PREFIX = "session:"
CONTACT_PREFIX = "session_contact:"
DEFAULT_SESSION_TTL_SECONDS = 24 * 60 * 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def session_key(session_id: str) -> str:
    return f"{SESSION_PREFIX}{session_id}"


def contact_key(contact: str) -> str:
    return f"{CONTACT_PREFIX}{contact}"


class SessionStore:
    """Create, read and append to visitor sessions."""

    def __init__(
        self,
        kv: KeyValueStore,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize session store.

        Args:
            kv: Backing key-value store
            ttl_seconds: Sliding TTL applied on every access
            clock: Source of the current UTC time
        """
        self.kv = kv
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    async def _save(self, session: Session) -> None:
        await self.kv.set(session_key(session.id), session.model_dump_json(), self.ttl_seconds)

    async def create_session(self, client_identity: str | None = None) -> str:
        """
        Create an empty session.

        Args:
            client_identity: Optional visitor identity (client IP)

        Returns:
            str: New session ID
        """
        now = self._clock()
        session = Session(
            id=str(uuid.uuid4()),
            started_at=now,
            last_activity_at=now,
            client_identity=client_identity,
        )
        await self._save(session)
        logger.info(f"{__name__}:create_session - Created session {session.id}")
        return session.id

    async def get_session(self, session_id: str) -> Session | None:
        """
        Load a session and extend its TTL.

        Returns:
            Session | None: None when the session never existed or expired
        """
        raw = await self.kv.get(session_key(session_id))
        if raw is None:
            return None

        session = Session.model_validate_json(raw)
        await self.kv.refresh(session_key(session_id), self.ttl_seconds)
        if session.contact_info:
            await self.kv.refresh(contact_key(session.contact_info), self.ttl_seconds)
        return session

    async def get_or_create(
        self,
        session_id: str | None = None,
        client_identity: str | None = None,
    ) -> Session:
        """
        Return the named session, or a new one when it is absent or expired.

        Args:
            session_id: Session to resume, if any
            client_identity: Identity recorded on a newly created session

        Returns:
            Session: Existing or newly created session
        """
        if session_id:
            session = await self.get_session(session_id)
            if session is not None:
                return session
            logger.info(f"{__name__}:get_or_create - Session {session_id} not found, creating new one")

        new_id = await self.create_session(client_identity)
        session = await self.get_session(new_id)
        return session

    async def add_message(self, session_id: str, message: Message) -> Session | None:
        """
        Append a message, stamping it with the current time.

        A missing session is not recreated.

        Args:
            session_id: Target session
            message: Message to append (its timestamp is overwritten)

        Returns:
            Session | None: Updated session, or None when not found
        """
        session = await self.get_session(session_id)
        if session is None:
            logger.warning(f"{__name__}:add_message - Session {session_id} not found, message dropped")
            return None

        now = self._clock()
        session.messages.append(message.model_copy(update={"timestamp": now}))
        session.last_activity_at = now
        await self._save(session)
        return session

    async def set_contact_info(self, session_id: str, contact: str) -> Session | None:
        """
        Store visitor contact info and index the session by it.

        Returns:
            Session | None: Updated session, or None when not found
        """
        session = await self.get_session(session_id)
        if session is None:
            logger.warning(f"{__name__}:set_contact_info - Session {session_id} not found")
            return None

        if session.contact_info and session.contact_info != contact:
            await self.kv.delete(contact_key(session.contact_info))

        session.contact_info = contact
        session.last_activity_at = self._clock()
        await self._save(session)
        await self.kv.set(contact_key(contact), session_id, self.ttl_seconds)
        logger.info(f"{__name__}:set_contact_info - Contact stored for session {session_id}")
        return session

    async def get_session_id_by_contact(self, contact: str) -> str | None:
        return await self.kv.get(contact_key(contact))

    async def delete_session(self, session_id: str) -> bool:
        """
        Remove a session and its contact index.

        Returns:
            bool: True if the session existed
        """
        raw = await self.kv.get(session_key(session_id))
        if raw is None:
            return False

        session = Session.model_validate_json(raw)
        if session.contact_info:
            await self.kv.delete(contact_key(session.contact_info))
        await self.kv.delete(session_key(session_id))
        logger.info(f"{__name__}:delete_session - Deleted session {session_id}")
        return True

    async def count_active(self) -> int:
        return len(await self.kv.keys(SESSION_PREFIX))
