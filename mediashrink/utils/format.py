# ============================================================================
# Utility Functions
# ============================================================================


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable size."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


def compression_ratio(original_size: int, resulting_size: int) -> float:
    """
    Percentage of bytes saved.

    Negative when the result is larger than the original, 0.0 for empty originals.
    """
    if original_size <= 0:
        return 0.0
    return (original_size - resulting_size) / original_size * 100
