"""Inline keyboard layouts used by the command handlers."""

from ..models import Button
from .commands import CallbackKind, chain_callback_data
from .messages import DELETE_WALLET_BUTTON, OPEN_DOCK_BUTTON, SHOW_KEY_BUTTON


def wallet_keyboard() -> list[list[Button]]:
    """Key management buttons shown under the /start reply."""
    return [
        [Button(label=SHOW_KEY_BUTTON, callback_data=CallbackKind.SHOW_KEY.value)],
        [Button(label=DELETE_WALLET_BUTTON, callback_data=CallbackKind.DELETE_WALLET.value)],
    ]


def chain_keyboard(chains: dict[str, str]) -> list[list[Button]]:
    """One row per chain, in configuration order.

    Args:
        chains: Mapping of chain key to display name.

    Returns:
        Keyboard rows with ``chain:<key>`` callback data.
    """
    return [
        [Button(label=name, callback_data=chain_callback_data(key))]
        for key, name in chains.items()
    ]


def dock_keyboard(mini_app_url: str) -> list[list[Button]]:
    """Single button opening the Mini App."""
    return [[Button(label=OPEN_DOCK_BUTTON, web_app_url=mini_app_url)]]
