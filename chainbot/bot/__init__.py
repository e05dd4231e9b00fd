"""Telegram bot implementation package.

Contains all Telegram specific functionality: the webhook endpoint, update
dispatch, command parsing, inline keyboards, MarkdownV2 formatting and the
outbound Bot API client.
"""
