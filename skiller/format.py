"""Small text formatting helpers for the command line"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from skiller.paths import contract_home


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len - 1] + "…"


def format_path(path: str | Path, home: Path, max_len: int = 50) -> str:
    return truncate(contract_home(path, home), max_len)


def format_count(n: int, singular: str, plural: Optional[str] = None) -> str:
    word = singular if n == 1 else (plural or singular + "s")
    return f"{n} {word}"


def format_agents(agents: list[str], limit: int = 3) -> str:
    if len(agents) > limit:
        return f"{', '.join(agents[:limit])} +{len(agents) - limit}"
    return ", ".join(agents)


def format_relative_date(iso: str, now: Optional[datetime] = None) -> str:
    """'today', 'yesterday', '3d ago', '2w ago', ... or the input if unparsable"""
    try:
        when = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return iso
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    days = (now - when).days
    if days <= 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    if days < 365:
        return f"{days // 30}mo ago"
    return f"{days // 365}y ago"
