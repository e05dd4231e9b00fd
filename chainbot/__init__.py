"""Chain Bot Application Package.

A Telegram webhook bot that relays chat messages to an OpenAI-compatible
completion API, answers crypto price questions through a tool call, and hands
out a throwaway EVM wallet per chat.

The application follows a modular architecture with separate concerns for:
- Webhook handling, update dispatch and message formatting
- External API clients (AI completion, price lookup)
- Wallet generation and per-chat session storage
"""
