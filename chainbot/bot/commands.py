"""Closed sets of text commands and callback actions.

Text commands are matched case-insensitively against the whole message;
callback data is matched by exact value or by the ``chain:`` prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

CHAIN_PREFIX = "chain:"


class Command(str, Enum):
    """Built-in text commands. Anything else goes to the AI."""

    START = "/start"
    SET_CHAIN = "/setchain"
    DOCK = "/dock"

    @classmethod
    def parse(cls, text: str) -> Command | None:
        """Match message text against the known commands.

        Args:
            text: Raw message text.

        Returns:
            The matching command or None for free-form text.
        """
        normalized = text.strip().lower()
        for command in cls:
            if command.value == normalized:
                return command
        return None


class CallbackKind(str, Enum):
    """Kinds of inline button presses."""

    SHOW_KEY = "show_key"
    DELETE_WALLET = "delete_wallet"
    CHAIN = "chain"


@dataclass(frozen=True)
class CallbackAction:
    """Parsed callback data.

    Attributes:
        kind: What the button asks for.
        argument: Chain key for CHAIN actions, empty otherwise.
    """

    kind: CallbackKind
    argument: str = ""

    @classmethod
    def parse(cls, data: str) -> CallbackAction | None:
        """Parse raw callback data.

        Args:
            data: Callback data attached to the pressed button.

        Returns:
            The parsed action or None for unrecognised data.
        """
        if data.startswith(CHAIN_PREFIX):
            return cls(CallbackKind.CHAIN, data[len(CHAIN_PREFIX):])
        if data == CallbackKind.SHOW_KEY.value:
            return cls(CallbackKind.SHOW_KEY)
        if data == CallbackKind.DELETE_WALLET.value:
            return cls(CallbackKind.DELETE_WALLET)
        return None


def chain_callback_data(chain_key: str) -> str:
    """Build callback data for a chain selection button."""
    return f"{CHAIN_PREFIX}{chain_key}"
