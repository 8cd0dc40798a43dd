from typing import List


def format_mmss(total_seconds: int) -> str:
    total = max(0, int(total_seconds))
    minutes = total // 60
    seconds = total % 60
    return f"{minutes:02d}:{seconds:02d}"


def format_hms_seconds(total_seconds: int) -> str:
    total = max(0, int(total_seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def clock_digits(total_seconds: int) -> List[int]:
    """Digits for an MM:SS display; minutes keep a third digit past 99."""
    total = max(0, int(total_seconds))
    minutes = total // 60
    seconds = total % 60
    return [int(ch) for ch in f"{minutes:02d}"] + [seconds // 10, seconds % 10]


def progress(duration_seconds: int, remaining_seconds: int) -> float:
    if duration_seconds <= 0:
        return 1.0
    remaining = max(0, min(duration_seconds, remaining_seconds))
    return (duration_seconds - remaining) / duration_seconds
