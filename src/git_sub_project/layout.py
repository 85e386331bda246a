"""Canonical sub-project layout — single source of truth.

A sub-project keeps its repository metadata in a renamed directory and a
one-line ``.git`` pointer file redirecting git to it:

    lib/
      .git                 "gitdir: .git-sub-project\\n"
      .git-sub-project/    objects/ refs/ HEAD config ...

The parent repository tracks the metadata directory and ignores the
pointer, so a fresh clone of the parent brings the metadata back but not
the pointer. No other module should hard-code these names.
"""

from __future__ import annotations

from pathlib import Path

POINTER_FILE = ".git"
DEFAULT_METADATA_DIR = ".git-sub-project"

# Minimum entries git needs before it treats a directory as a repository
METADATA_SUBDIRS = ("objects", "refs")
METADATA_FILES = ("HEAD", "config")

# Classification states
MISSING = "missing"
BLOCKED = "blocked"
NO_METADATA = "no-metadata"
LINKED = "linked"
CONFLICT = "conflict"
UNLINKED = "unlinked"


def pointer_line(metadata_dir: str = DEFAULT_METADATA_DIR) -> str:
    """Return the exact pointer-file content for a metadata directory name."""
    return f"gitdir: {metadata_dir}\n"


def pointer_matches(content: str, metadata_dir: str = DEFAULT_METADATA_DIR) -> bool:
    """True if pointer content is the expected line (final newline optional)."""
    expected = pointer_line(metadata_dir)
    return content == expected or content == expected.rstrip("\n")


def missing_metadata_entries(metadata_path: Path | str) -> list[str]:
    """List the minimum metadata entries absent from metadata_path.

    Returns an empty list when the directory has the full minimum structure.
    A missing directory reports every entry as missing.
    """
    path = Path(metadata_path)
    missing = [name for name in METADATA_SUBDIRS if not (path / name).is_dir()]
    missing += [name for name in METADATA_FILES if not (path / name).is_file()]
    return missing


def is_metadata_dir(metadata_path: Path | str) -> bool:
    path = Path(metadata_path)
    return path.is_dir() and not missing_metadata_entries(path)


def read_pointer(directory: Path | str) -> str | None:
    """Return the content of directory/.git if it is a readable regular file, else None.

    Undecodable bytes are replaced rather than raised, so a corrupted pointer
    reads as content that simply does not match.
    """
    pointer = Path(directory) / POINTER_FILE
    if not pointer.is_file():
        return None
    try:
        return pointer.read_bytes().decode("utf-8", errors="replace")
    except OSError:
        return None


def write_pointer(directory: Path | str, metadata_dir: str = DEFAULT_METADATA_DIR) -> Path:
    """Write the pointer file into directory and return its path."""
    pointer = Path(directory) / POINTER_FILE
    pointer.write_text(pointer_line(metadata_dir))
    return pointer


def classify(directory: Path | str, metadata_dir: str = DEFAULT_METADATA_DIR) -> str:
    """Classify a directory's pointer state.

    Order matters: a real .git directory is BLOCKED even when a metadata
    directory sits next to it, and a pointer is only judged once the
    metadata structure is known to be valid.

    Returns:
        One of MISSING, BLOCKED, NO_METADATA, LINKED, CONFLICT, UNLINKED.
    """
    path = Path(directory)
    if not path.is_dir():
        return MISSING

    pointer = path / POINTER_FILE
    if pointer.is_dir():
        return BLOCKED

    if not is_metadata_dir(path / metadata_dir):
        return NO_METADATA

    content = read_pointer(path)
    if content is not None and pointer_matches(content, metadata_dir):
        return LINKED

    # Anything else occupying .git (stale pointer, symlink, socket...) is a conflict
    if content is not None or pointer.exists() or pointer.is_symlink():
        return CONFLICT

    return UNLINKED
