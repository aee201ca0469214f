"""
Visitor session state.
"""

from concierge.core.session.session_store import SessionStore

__all__ = ["SessionStore"]
