"""
Name templates for the bulk renamer.

Placeholders:
  {today}       today's date as YYYY-MM-DD (fixed once per run)
  {modifiedAt}  the file's last-modified date as YYYY-MM-DD
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

TODAY = "{today}"
MODIFIED_AT = "{modifiedAt}"


# ------------------------- Dates -------------------------


def format_date(moment: datetime) -> str:
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def format_timestamp(ts: float) -> str:
    # local time, same as the mtime shown by the file manager
    return format_date(datetime.fromtimestamp(ts))


def today_date(clock: Callable[[], datetime] = datetime.now) -> str:
    return format_date(clock())


def modified_time(path: Path) -> float:
    return path.stat().st_mtime


# ------------------------- Entries -------------------------


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: Path
    ext: str

    @classmethod
    def from_path(cls, p: Path) -> "FileEntry":
        return cls(p.name, p, p.suffix.lower())


def list_entries(folder: Union[str, Path]) -> List[FileEntry]:
    """List every entry of ``folder`` in name order.

    Sub-directories are entries too and get renamed like files. Raises the
    underlying ``OSError`` when the folder is missing or unreadable.
    """
    root = Path(folder).expanduser()
    entries = [FileEntry.from_path(p) for p in sorted(root.iterdir())]
    logger.debug("Listed %d entries in %s", len(entries), root)
    return entries


# ------------------------- Templates -------------------------


def substitute_today(template: str, moment: Optional[datetime] = None) -> str:
    if TODAY not in template:
        return template
    # only the first occurrence is replaced
    return template.replace(TODAY, format_date(moment or datetime.now()), 1)


def resolve_template(
    template: str,
    path: Path,
    modified_at: Callable[[Path], float] = modified_time,
) -> str:
    if MODIFIED_AT not in template:
        return template
    return template.replace(MODIFIED_AT, format_timestamp(modified_at(path)), 1)


# ------------------------- Collisions -------------------------


def resolve_batch_names(
    entries: Sequence[FileEntry],
    template: str,
    modified_at: Callable[[Path], float] = modified_time,
) -> List[str]:
    """Final base names for ``entries``, aligned with the input order.

    A name shared by several entries gets a `` - <n>`` suffix, numbered from 1
    in input order. Names that end up unique are left alone.
    """
    names = [resolve_template(template, e.path, modified_at) for e in entries]
    totals = Counter(names)

    seen: Counter = Counter()
    final: List[str] = []
    for name in names:
        seen[name] += 1
        if totals[name] == 1:
            final.append(name)
        else:
            final.append(f"{name} - {seen[name]}")

    dupes = sum(1 for n in totals if totals[n] > 1)
    if dupes:
        logger.debug("%d resolved names shared by several files", dupes)
    return final
