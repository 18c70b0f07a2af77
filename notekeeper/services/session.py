"""
Session Gate.

Static credential check with a persisted "authenticated" flag.

This is a placeholder login gate, not a security mechanism: the expected
pair is a plain constant from config/settings/session.yaml and the flag
is an unprotected local value. Deployments that need authentication
must use an external identity provider instead.
"""

import hmac

from notekeeper.cache.local import SESSION_KEY, LocalCache
from notekeeper.core.exceptions import AuthenticationFailed
from notekeeper.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class SessionGate:
    """Fixed-credential login gate backed by the local cache."""

    def __init__(self, cache: LocalCache, username: str, password: str) -> None:
        self.cache = cache
        self._username = username
        self._password = password

    def _matches(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        return user_ok and pass_ok

    async def authenticate(self, username: str, password: str) -> None:
        """
        Check the pair and persist the flag.

        Raises:
            AuthenticationFailed: If the pair does not match. Nothing is stored.
        """
        if not self._matches(username, password):
            log_with_source(logger, "session", "warning", "Login rejected", username=username)
            raise AuthenticationFailed()

        await self.cache.set(SESSION_KEY, True)
        log_with_source(logger, "session", "info", "Login accepted", username=username)

    async def login(self, username: str, password: str) -> bool:
        """Return True and persist the flag on a match, False otherwise."""
        try:
            await self.authenticate(username, password)
        except AuthenticationFailed:
            return False
        return True

    async def is_authenticated(self) -> bool:
        """Read the persisted flag."""
        return await self.cache.get(SESSION_KEY) is True

    async def logout(self) -> None:
        """Clear the persisted flag."""
        await self.cache.delete(SESSION_KEY)
        log_with_source(logger, "session", "info", "Logged out")
