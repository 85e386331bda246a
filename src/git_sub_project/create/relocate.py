"""Move a freshly created .git directory into the sub-project layout."""

import shutil
from pathlib import Path

from git_sub_project.errors import SubProjectError
from git_sub_project.layout import POINTER_FILE, write_pointer


def exclude_metadata_dir(metadata_path: Path, metadata_dir: str) -> None:
    """Add /<metadata_dir>/ to the repository's info/exclude, once."""
    exclude = metadata_path / "info" / "exclude"
    exclude.parent.mkdir(parents=True, exist_ok=True)

    pattern = f"/{metadata_dir}/"
    existing = exclude.read_text() if exclude.is_file() else ""
    if pattern in existing.splitlines():
        return
    if existing and not existing.endswith("\n"):
        existing += "\n"
    exclude.write_text(existing + pattern + "\n")


def relocate_metadata(directory: Path, metadata_dir: str) -> Path:
    """Rename directory/.git to directory/<metadata_dir> and write the pointer.

    The sub-project's own index would otherwise pick up its metadata
    directory as untracked content, so it is also added to info/exclude.

    Returns:
        Path to the relocated metadata directory.
    """
    source = directory / POINTER_FILE
    dest = directory / metadata_dir
    if not source.is_dir():
        raise SubProjectError(f"{source} is not a git directory")
    if dest.exists():
        raise SubProjectError(f"{dest} already exists")

    shutil.move(str(source), str(dest))
    write_pointer(directory, metadata_dir)
    exclude_metadata_dir(dest, metadata_dir)
    return dest


def remove_contents(directory: Path) -> None:
    """Delete everything inside directory, keeping the directory itself."""
    for child in directory.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
