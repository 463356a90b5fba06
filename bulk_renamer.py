#!/usr/bin/env python3
"""
Interactive bulk file renamer.

Asks for a folder and a name template, previews the result and renames every
entry in the folder once confirmed. Entries that end up with the same name get a
" - 1", " - 2", ... suffix. The original extension is kept (lower-cased).

Reads optional settings from environment or .env:
  RENAMER_MAX_WORKERS  size of the rename thread pool (default 8)
  RENAMER_LOG_LEVEL    logging level (default WARNING)

Example local run:
  python bulk_renamer.py
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List

from dotenv import find_dotenv, load_dotenv

from name_template import (
    MODIFIED_AT,
    TODAY,
    FileEntry,
    list_entries,
    modified_time,
    resolve_batch_names,
    substitute_today,
    today_date,
)
from prompt_session import PromptSession
from rename_executor import DEFAULT_MAX_WORKERS, RenameResult, rename_all, safe_rename

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ------------------------- Settings -------------------------


@dataclass
class Settings:
    max_workers: int = DEFAULT_MAX_WORKERS
    log_level: str = "WARNING"


def load_settings() -> Settings:
    raw_workers = os.getenv("RENAMER_MAX_WORKERS", str(DEFAULT_MAX_WORKERS)).strip()
    try:
        max_workers = int(raw_workers)
    except ValueError:
        raise SystemExit(f"RENAMER_MAX_WORKERS must be an integer, got {raw_workers!r}")
    if max_workers < 1:
        raise SystemExit("RENAMER_MAX_WORKERS must be at least 1")

    log_level = os.getenv("RENAMER_LOG_LEVEL", "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise SystemExit(f"Unknown RENAMER_LOG_LEVEL: {log_level}")

    return Settings(max_workers=max_workers, log_level=log_level)


# ------------------------- Output helpers -------------------------


def plural(count: int, word: str = "file") -> str:
    return word if count == 1 else f"{word}s"


def print_files(session: PromptSession, entries: List[FileEntry]) -> None:
    session.say(f"{len(entries)} {plural(len(entries))} found:")
    for e in entries:
        session.say(f"  - {e.name}")


def print_patterns(session: PromptSession, clock: Callable[[], datetime]) -> None:
    session.say()
    session.say("Available file name patterns:")
    session.say(f"  {TODAY} = {today_date(clock)} (today as YYYY-MM-DD)")
    session.say(f"  {MODIFIED_AT} = file modified date as YYYY-MM-DD")
    session.say()


def print_preview(session: PromptSession, folder: Path, name: str) -> None:
    session.say(
        f"The files in {folder} will be renamed to {name} - 1.ext, {name} - 2.ext, etc."
    )


# ------------------------- Flow -------------------------


class Outcome(Enum):
    EMPTY = "empty"
    CANCELLED = "cancelled"
    RENAMED = "renamed"
    PARTIAL = "partial"
    FAILED = "failed"

    @property
    def exit_code(self) -> int:
        return 1 if self in (Outcome.PARTIAL, Outcome.FAILED) else 0


def rename_files(
    session: PromptSession,
    folder: Path,
    template: str,
    settings: Settings,
    previewed: List[FileEntry],
    lister: Callable[[Path], List[FileEntry]] = list_entries,
    modified_at: Callable[[Path], float] = modified_time,
    rename: Callable[[Path, Path], None] = safe_rename,
) -> Outcome:
    # listed again on purpose: rename what is there now, not what was previewed
    entries = lister(folder)
    if [e.name for e in entries] != [e.name for e in previewed]:
        logger.warning("%s changed since it was listed, renaming current contents", folder)

    session.say("Renaming files...")
    final_names = resolve_batch_names(entries, template, modified_at)

    def report(result: RenameResult) -> None:
        session.say(f"Renamed {result.source} to {result.destination}")

    batch = rename_all(
        folder,
        entries,
        final_names,
        rename=rename,
        max_workers=settings.max_workers,
        on_renamed=report,
    )

    for r in batch.failed:
        session.warn(f"Failed to rename {r.source} to {r.destination}: {r.error}")

    done = len(batch.succeeded)
    if batch.ok:
        session.say(f"Successfully renamed {done} {plural(done)}.")
        return Outcome.RENAMED
    session.say(f"Renamed {done} of {batch.total} {plural(batch.total)}.")
    return Outcome.PARTIAL


def run(
    session: PromptSession,
    settings: Settings | None = None,
    clock: Callable[[], datetime] = datetime.now,
    lister: Callable[[Path], List[FileEntry]] = list_entries,
    modified_at: Callable[[Path], float] = modified_time,
    rename: Callable[[Path, Path], None] = safe_rename,
) -> Outcome:
    settings = settings or Settings()
    try:
        folder = Path(session.ask("Enter folder path: ")).expanduser()
        entries = lister(folder)
        if not entries:
            session.say("No file found.")
            return Outcome.EMPTY

        print_files(session, entries)
        print_patterns(session, clock)

        template = session.ask("Enter new file name: ")
        template = substitute_today(template, clock())
        print_preview(session, folder, template)

        answer = session.ask("Do you want to proceed? (y/n): ")
        if answer.strip().lower() != "y":
            session.say("No changes made.")
            return Outcome.CANCELLED

        return rename_files(
            session, folder, template, settings, entries,
            lister=lister, modified_at=modified_at, rename=rename,
        )
    except Exception as e:
        logger.exception("Unhandled error")
        session.warn(f"Error: {e}")
        return Outcome.FAILED
    finally:
        session.close()


# ------------------------- CLI / main -------------------------


def main() -> None:
    # .env is looked up from the working directory
    load_dotenv(find_dotenv(usecwd=True), override=True)

    p = argparse.ArgumentParser(
        description="Interactively rename every file in a folder from a name template."
    )
    p.parse_args()

    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    with PromptSession() as session:
        outcome = run(session, settings)
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
