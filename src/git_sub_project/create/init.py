"""Convert an existing directory into a linked sub-project."""

import shutil
from pathlib import Path

from git_sub_project.config import LinkConfig
from git_sub_project.create.relocate import relocate_metadata
from git_sub_project.errors import InitError, SubProjectError
from git_sub_project.layout import POINTER_FILE
from git_sub_project.link.probe import GitStatusProbe, _run_git


def _rollback(directory: Path, metadata_dir: str) -> None:
    """Undo a partial init; neither .git nor the metadata dir existed before."""
    pointer = directory / POINTER_FILE
    if pointer.is_dir():
        shutil.rmtree(pointer)
    elif pointer.exists():
        pointer.unlink()
    if (directory / metadata_dir).is_dir():
        shutil.rmtree(directory / metadata_dir)


def init_sub_project(
    directory: Path | str,
    remote_url: str | None = None,
    config: LinkConfig | None = None,
) -> dict:
    """Initialize a repository in directory using the sub-project layout.

    Existing files are staged for a first commit but not committed. When
    remote_url is given it is configured as ``origin``.

    Args:
        directory: Existing directory to convert.
        remote_url: Optional URL for the ``origin`` remote.
        config: Engine settings. Defaults to LinkConfig().

    Returns:
        Dict with keys: directory, remote, staged, metadata_dir, dry_run.

    Raises:
        InitError: If the directory is missing, already a repository, or a
            git step fails.
    """
    cfg = config or LinkConfig()
    meta = cfg.metadata_dir
    dir_path = Path(directory).expanduser()
    if not dir_path.is_absolute():
        dir_path = cfg.root / dir_path

    if not dir_path.is_dir():
        raise InitError(f"Directory not found: {dir_path}")
    pointer = dir_path / POINTER_FILE
    if pointer.exists() or pointer.is_symlink():
        raise InitError(f"{pointer} already exists; directory is already a repository")
    if (dir_path / meta).exists():
        raise InitError(f"{dir_path / meta} already exists; use link instead")

    result = {
        "directory": str(dir_path),
        "remote": remote_url,
        "staged": 0,
        "metadata_dir": meta,
        "dry_run": cfg.dry_run,
    }
    if cfg.dry_run:
        return result

    try:
        initialized = _run_git(["init"], dir_path)
        if initialized.returncode != 0:
            raise InitError(f"git init failed: {initialized.stderr.strip()}")

        relocate_metadata(dir_path, meta)

        steps = [["add", "-A"]]
        if remote_url:
            steps.append(["remote", "add", "origin", remote_url])
        for args in steps:
            step = _run_git(args, dir_path)
            if step.returncode != 0:
                raise InitError(f"git {' '.join(args[:2])} failed: {step.stderr.strip()}")

        ok, detail = GitStatusProbe().check(dir_path, meta)
        if not ok:
            raise InitError(f"Initialized sub-project does not work: {detail}")
    except (OSError, SubProjectError) as e:
        _rollback(dir_path, meta)
        if isinstance(e, InitError):
            raise
        raise InitError(f"Could not initialize {dir_path}: {e}") from e

    staged = _run_git(["diff", "--cached", "--name-only"], dir_path)
    result["staged"] = len([line for line in staged.stdout.splitlines() if line.strip()])
    return result
