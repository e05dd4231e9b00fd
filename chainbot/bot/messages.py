"""Telegram bot message templates and constants.

Contains all user-facing message templates, button labels and error messages
for bot responses. Texts are stored unescaped; the response formatter escapes
them for the configured parse mode right before sending.
"""

# Bot commands and descriptions
WELCOME_MESSAGE = "Welcome to the AI-powered bot! How can I help you today?"

WALLET_CREATED_MESSAGE = (
    "Welcome to the AI-powered bot! A new wallet has been created for you.\n\n"
    "Address:\n```\n{address}\n```"
)
WALLET_CREATED_KEY_LINE = "\n\nPrivate key:\n```\n{private_key}\n```"
WALLET_CREATED_FOOTER = "\n\nAsk me anything, or manage your wallet with the buttons below."

# Wallet actions
PRIVATE_KEY_MESSAGE = "Your private key:\n```\n{private_key}\n```\nNever share it with anyone."
WALLET_DELETED_MESSAGE = "Your wallet has been deleted."
NO_WALLET_MESSAGE = "No wallet found. Send /start to create one."

# Chains
CHOOSE_CHAIN_MESSAGE = "Please choose a chain:"
CHAIN_SET_MESSAGE = "Chain set to: {chain}"
UNKNOWN_CHAIN_MESSAGE = "Unknown chain. Send /setchain to see the available options."

# Mini App
DOCK_MESSAGE = "Open the dock to manage your assets:"
DOCK_UNAVAILABLE_MESSAGE = "The dock is not available right now."

# AI replies
AI_ERROR_MESSAGE = "Sorry, I'm having trouble processing your request right now."
PRICE_MESSAGE = "The current price of {crypto} is ${price}"
PRICE_NOT_FOUND_MESSAGE = "Sorry, I couldn't find the price for {crypto}."

# Error messages
GENERIC_ERROR_MESSAGE = "Sorry, something went wrong. Please try again later."

# Button labels
SHOW_KEY_BUTTON = "Show private key"
DELETE_WALLET_BUTTON = "Delete wallet"
OPEN_DOCK_BUTTON = "Open dock"
