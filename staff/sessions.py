"""Back-office session storage.

A session maps an opaque random token to the admin it was issued for, that
admin's role and an expiry time. Stores only have to support get, set with
expiry and delete; which store is used is configured with
``settings.ADMIN_SESSION_STORE``.
"""

import threading
from dataclasses import dataclass
from datetime import datetime

from django.conf import settings
from django.core.cache import caches
from django.utils import timezone
from django.utils.module_loading import import_string


@dataclass(frozen=True)
class AdminSession:
    token: str
    admin_id: int
    role: str
    expires_at: datetime

    def is_expired(self, now=None):
        return (now or timezone.now()) >= self.expires_at


class SessionStore:
    def get(self, token):
        """Return the live session for ``token`` or ``None``."""
        raise NotImplementedError

    def set(self, session):
        raise NotImplementedError

    def delete(self, token):
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Process-local store guarded by a lock; sessions are lost on restart."""

    def __init__(self):
        self._sessions = {}
        self._lock = threading.Lock()

    def get(self, token):
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired():
                del self._sessions[token]
                return None
            return session

    def set(self, session):
        with self._lock:
            self._sessions[session.token] = session

    def delete(self, token):
        with self._lock:
            self._sessions.pop(token, None)

    def clear(self):
        with self._lock:
            self._sessions.clear()


class CacheSessionStore(SessionStore):
    """Store backed by a Django cache; the cache entry expires with the session."""

    key_prefix = "admin-session:"

    def __init__(self, alias="default"):
        self.cache = caches[alias]

    def _key(self, token):
        return f"{self.key_prefix}{token}"

    def get(self, token):
        session = self.cache.get(self._key(token))
        if session is None:
            return None
        if session.is_expired():
            self.delete(token)
            return None
        return session

    def set(self, session):
        timeout = (session.expires_at - timezone.now()).total_seconds()
        self.cache.set(self._key(session.token), session, timeout=max(int(timeout), 1))

    def delete(self, token):
        self.cache.delete(self._key(token))


_store = None
_store_lock = threading.Lock()


def get_session_store():
    global _store
    with _store_lock:
        if _store is None:
            _store = import_string(settings.ADMIN_SESSION_STORE)()
        return _store


def set_session_store(store):
    """Swap the active store, e.g. for tests; ``None`` reloads it from settings."""
    global _store
    with _store_lock:
        _store = store
