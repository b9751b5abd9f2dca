"""Human-readable formatting helpers."""

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_size(size_bytes: int) -> str:
    """Format bytes as a human-readable string (binary units, 1 KB = 1024 B)."""
    size = float(max(size_bytes, 0))
    unit_index = 0

    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {SIZE_UNITS[0]}"
    return f"{size:.1f} {SIZE_UNITS[unit_index]}"


def format_age(age_days: int) -> str:
    """Format an age in whole days."""
    if age_days == 0:
        return "today"
    if age_days == 1:
        return "1 day"
    return f"{age_days} days"


def truncate(text: str, max_length: int) -> str:
    """Truncate text to max_length, appending '...' if truncated."""
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 3, 0)] + "..."
