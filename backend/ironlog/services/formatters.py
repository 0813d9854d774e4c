from datetime import datetime, timezone


def format_volume(volume: float) -> str:
    if volume >= 1000:
        return f"{volume / 1000:.1f}k kg"
    return f"{round(volume)} kg"


def format_duration(secs: int) -> str:
    """1h+ reads as "1h 5m"; anything shorter as "4m 07s"."""
    secs = max(0, int(secs))
    m, s = divmod(secs, 60)
    if m >= 60:
        h, m = divmod(m, 60)
        return f"{h}h {m}m"
    return f"{m}m {s:02d}s"


def format_clock(secs: int) -> str:
    """Workout clock, zero padded: 07:05."""
    m, s = divmod(max(0, int(secs)), 60)
    return f"{m:02d}:{s:02d}"


def format_set_clock(secs: int) -> str:
    m, s = divmod(max(0, int(secs)), 60)
    return f"{m}:{s:02d}"


def format_relative_time(ts: datetime, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    minutes = int((now - ts).total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    local = ts.astimezone()
    return f"{local.day} {local.strftime('%b')}"
