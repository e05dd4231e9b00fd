"""Response formatting for outgoing bot messages.

Prepares free-form text (AI replies and message templates) for Telegram's
MarkdownV2 parse mode. Fenced code blocks and ``*``/``_`` emphasis markers
pass through untouched, every other reserved character gets a backslash.
"""

import re

from telegram.constants import ParseMode

from ..config import EscapeMode

# Characters that need escaping in MarkdownV2
MARKDOWN_V2_RESERVED = frozenset("_*[]()~`>#+-=|{}.!")
CODE_FENCE = "```"
EMPHASIS_MARKERS = frozenset("*_")

_ESCAPED_DASH_RUN = re.compile(r"(?:\\-){2,}")


def escape_markdown_v2(text: str, collapse_dashes: bool = False) -> str:
    """Escape special characters for MarkdownV2 format.

    Single left-to-right scan with two flags: inside a fenced code block and
    inside an emphasis span. A lone ``*`` or ``_`` flips the emphasis flag
    without looking for its partner, so unmatched or nested markers leave the
    rest of the text unescaped. Running the function on its own output escapes
    the backslashes again.

    Args:
        text: Text to escape.
        collapse_dashes: Turn runs of two or more escaped dashes back into
            plain dashes, so separators like ``---`` survive.

    Returns:
        Escaped text safe for MarkdownV2.
    """
    parts: list[str] = []
    in_code_block = False
    in_emphasis = False
    i = 0
    length = len(text)

    while i < length:
        if text.startswith(CODE_FENCE, i):
            in_code_block = not in_code_block
            parts.append(CODE_FENCE)
            i += len(CODE_FENCE)
            continue

        char = text[i]
        if not in_code_block and char in EMPHASIS_MARKERS:
            in_emphasis = not in_emphasis
            parts.append(char)
        elif not in_code_block and not in_emphasis and char in MARKDOWN_V2_RESERVED:
            parts.append("\\" + char)
        else:
            parts.append(char)
        i += 1

    escaped = "".join(parts)
    if collapse_dashes:
        escaped = _ESCAPED_DASH_RUN.sub(lambda match: "-" * (len(match.group(0)) // 2), escaped)
    return escaped


class ResponseFormatter:
    """Formats outgoing text according to the configured escape mode."""

    def __init__(self, mode: EscapeMode | str = EscapeMode.MARKDOWN_V2_COLLAPSE_DASHES) -> None:
        """Initialize response formatter.

        Args:
            mode: Escape mode or its configuration value.
        """
        self.mode = EscapeMode(mode)

    @property
    def parse_mode(self) -> str | None:
        """Telegram parse mode matching the escape mode."""
        if self.mode is EscapeMode.PLAIN:
            return None
        return ParseMode.MARKDOWN_V2

    def format_text(self, text: str) -> str:
        """Escape text for sending.

        Args:
            text: Unescaped message text.

        Returns:
            Text ready for the sendMessage call.
        """
        if self.mode is EscapeMode.PLAIN:
            return text
        return escape_markdown_v2(
            text, collapse_dashes=self.mode is EscapeMode.MARKDOWN_V2_COLLAPSE_DASHES
        )
