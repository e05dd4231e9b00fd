"""Business logic services package.

Contains external API integrations and state used by the dispatcher: AI chat
completion, crypto price lookup, wallet generation and per-chat session
storage.
"""
