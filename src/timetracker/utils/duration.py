"""Duration display helpers."""

from __future__ import annotations


def format_duration(seconds: int | None) -> str:
    """Format a number of seconds as ``H:MM:SS``.

    Hours are not padded and not bounded. Zero or ``None`` yields ``"0"``,
    the shorthand for "no duration".

    Args:
        seconds: Non-negative number of seconds.

    Returns:
        Formatted duration string.

    Raises:
        ValueError: If ``seconds`` is negative.
    """
    if not seconds:
        return "0"
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")

    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"
