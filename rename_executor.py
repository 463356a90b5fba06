"""
Concurrent rename dispatch.

Every rename runs on its own worker; a failing rename does not stop, cancel or
undo the others. The caller gets back which renames went through and which
failed, and why.
"""

from __future__ import annotations

import errno
import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from name_template import FileEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


@dataclass
class RenameResult:
    source: Path
    destination: Path
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    succeeded: List[RenameResult] = field(default_factory=list)
    failed: List[RenameResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


def safe_rename(src: Path, dst: Path) -> None:
    """Rename ``src`` to ``dst`` without ever replacing another file.

    Renaming onto itself (same file, possibly a case-only change) is allowed.
    """
    if dst.exists() and not src.samefile(dst):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(dst))
    src.rename(dst)


def plan_renames(
    folder: Union[str, Path], entries: Sequence[FileEntry], final_names: Sequence[str]
) -> List[Tuple[Path, Path]]:
    if len(entries) != len(final_names):
        raise ValueError(
            f"Got {len(final_names)} names for {len(entries)} files"
        )
    root = Path(folder).expanduser()
    return [(e.path, root / f"{name}{e.ext}") for e, name in zip(entries, final_names)]


def _rename_one(
    src: Path, dst: Path, rename: Callable[[Path, Path], None]
) -> RenameResult:
    try:
        rename(src, dst)
    except OSError as e:
        return RenameResult(src, dst, e)
    return RenameResult(src, dst)


def rename_all(
    folder: Union[str, Path],
    entries: Sequence[FileEntry],
    final_names: Sequence[str],
    rename: Callable[[Path, Path], None] = safe_rename,
    max_workers: int = DEFAULT_MAX_WORKERS,
    on_renamed: Optional[Callable[[RenameResult], None]] = None,
) -> BatchResult:
    plan = plan_renames(folder, entries, final_names)
    batch = BatchResult()
    if not plan:
        return batch

    logger.debug("Dispatching %d renames on %d workers", len(plan), max_workers)
    order = {src: i for i, (src, _) in enumerate(plan)}

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_rename_one, src, dst, rename) for src, dst in plan]
        for future in as_completed(futures):
            result = future.result()
            if result.ok:
                batch.succeeded.append(result)
                if on_renamed:
                    on_renamed(result)
            else:
                logger.warning(
                    "Rename failed: %s -> %s: %s",
                    result.source, result.destination, result.error,
                )
                batch.failed.append(result)

    # completion order is arbitrary; report in input order
    batch.succeeded.sort(key=lambda r: order[r.source])
    batch.failed.sort(key=lambda r: order[r.source])
    return batch
