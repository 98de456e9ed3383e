"""Issued session tokens."""

from __future__ import annotations

import logging
import secrets
from typing import TYPE_CHECKING

from hunt_tracker.domain.errors import PersistenceError

if TYPE_CHECKING:
    from hunt_tracker.application.services.background import BackgroundTasks
    from hunt_tracker.domain.ports import KeyValueRepository

logger = logging.getLogger(__name__)


class SessionTokenService:
    """Issues opaque reconnection tokens and keeps them persisted."""

    def __init__(self, repository: KeyValueRepository, background: BackgroundTasks) -> None:
        self.repository = repository
        self.background = background
        self._tokens: dict[str, str] = {}

    async def load(self) -> None:
        try:
            data = await self.repository.load()
        except PersistenceError as e:
            logger.warning(f"Could not load session tokens, starting empty: {e}")
            return
        self._tokens = {str(k): str(v) for k, v in data.items()}
        logger.info(f"Loaded {len(self._tokens)} session token(s)")

    def issue(self, viewer_id: str) -> str:
        token = secrets.token_urlsafe(24)
        self._tokens[token] = viewer_id
        self.background.spawn(self._save(dict(self._tokens)))
        return token

    def viewer_for(self, token: str) -> str | None:
        return self._tokens.get(token)

    async def _save(self, tokens: dict[str, str]) -> None:
        try:
            await self.repository.save(tokens)
        except PersistenceError as e:
            logger.error(f"Failed to persist session tokens: {e}")
