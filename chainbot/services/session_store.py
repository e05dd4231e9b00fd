"""Per-chat wallet session storage.

Wallet records live only in process memory and disappear on restart. The
store hands out a per-chat ``asyncio.Lock`` so read-modify-write sequences
for one chat (two near-simultaneous /start deliveries) run one after another.
"""

import asyncio
import logging
import weakref
from abc import ABC, abstractmethod

from ..models import WalletRecord

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Keyed storage of wallet records by chat id."""

    @abstractmethod
    async def get(self, chat_id: int) -> WalletRecord | None:
        """Return the wallet stored for a chat, or None."""

    @abstractmethod
    async def put(self, chat_id: int, record: WalletRecord) -> None:
        """Store a wallet for a chat, replacing any previous one."""

    @abstractmethod
    async def delete(self, chat_id: int) -> bool:
        """Remove the wallet of a chat.

        Returns:
            True if a record was removed, False if there was none.
        """

    @abstractmethod
    def lock(self, chat_id: int) -> asyncio.Lock:
        """Lock serializing updates for one chat."""


class InMemorySessionStore(SessionStore):
    """Dictionary-backed session store for a single process."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._records: dict[int, WalletRecord] = {}
        self._locks: weakref.WeakValueDictionary[int, asyncio.Lock] = weakref.WeakValueDictionary()

    async def get(self, chat_id: int) -> WalletRecord | None:
        return self._records.get(chat_id)

    async def put(self, chat_id: int, record: WalletRecord) -> None:
        if chat_id in self._records:
            logger.debug(f"Replacing wallet for chat {chat_id}")
        self._records[chat_id] = record

    async def delete(self, chat_id: int) -> bool:
        return self._records.pop(chat_id, None) is not None

    def lock(self, chat_id: int) -> asyncio.Lock:
        # Entries vanish once no holder or waiter references the lock
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[chat_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._records)
