"""Markdown helpers for Feishu lark_md messages."""

# Horizontal rule
SEPARATOR = '<hr />'

# Characters that carry meaning in Markdown; the backslash goes first so
# escapes added for later tokens are not doubled.
SPECIAL_CHARACTERS = ['\\', '`', '*', '_', '{', '}', '[', ']', '(', ')', '#', '+', '-', '.', '!']


def escape(text: str) -> str:
    """Backslash-escape Markdown special characters."""
    for token in SPECIAL_CHARACTERS:
        text = text.replace(token, '\\' + token)
    return text


def link(identifier: str, url: str) -> str:
    """Inline link with an escaped label."""
    return f"[{escape(identifier)}]({url})"
