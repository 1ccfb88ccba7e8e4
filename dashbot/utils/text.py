"""Text utilities – command parsing and truncation."""

from __future__ import annotations


def parse_invocation(text: str | None, prefix: str) -> tuple[str, list[str]] | None:
    """Split ``"<prefix>name arg1 arg2"`` into ``("name", ["arg1", "arg2"])``.

    The prefix match is exact and case-sensitive. Only the command name is
    lowercased; arguments keep their casing. Returns ``None`` when *text* is
    not an invocation or nothing follows the prefix.
    """
    if not text or not prefix or not text.startswith(prefix):
        return None
    tokens = text[len(prefix):].split()
    if not tokens:
        return None
    return tokens[0].lower(), tokens[1:]


def truncate(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate *text* to *max_len* characters, appending *suffix* if cut."""
    if len(text) <= max_len:
        return text
    return text[: max_len - len(suffix)] + suffix
