def like_pattern(text: str) -> str:
    """Substring pattern for LIKE/ILIKE with escape="\\"; `%` and `_` in text match literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
