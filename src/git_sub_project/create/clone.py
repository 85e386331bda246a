"""Clone a repository straight into the sub-project layout."""

import shutil
from pathlib import Path

from git_sub_project.config import LinkConfig
from git_sub_project.create.relocate import relocate_metadata, remove_contents
from git_sub_project.errors import CloneError, SubProjectError
from git_sub_project.link.probe import GitStatusProbe, _run_git


def _discard(target: Path, pre_existing: bool) -> None:
    if not target.exists():
        return
    if pre_existing:
        remove_contents(target)
    else:
        shutil.rmtree(target)


def clone_sub_project(
    url: str,
    target: Path | str,
    branch: str | None = None,
    config: LinkConfig | None = None,
) -> dict:
    """Clone url into target and leave it linked.

    Runs ``git clone``, moves target/.git to target/<metadata_dir>, writes
    the pointer file and verifies with ``git status``. Any failure removes
    what was created: the whole directory when this call made it, otherwise
    only its contents.

    Args:
        url: Anything ``git clone`` accepts. Relative paths resolve against
            config.root.
        target: Sub-project directory. Must be absent or empty.
        branch: Optional branch or tag to check out.
        config: Engine settings. Defaults to LinkConfig().

    Returns:
        Dict with keys: target, url, branch, metadata_dir, dry_run.

    Raises:
        CloneError: If the target is unusable or any step fails.
    """
    cfg = config or LinkConfig()
    meta = cfg.metadata_dir
    target_path = Path(target).expanduser()
    if not target_path.is_absolute():
        target_path = cfg.root / target_path

    pre_existing = target_path.exists()
    if pre_existing:
        if not target_path.is_dir():
            raise CloneError(f"Target exists and is not a directory: {target_path}")
        if any(target_path.iterdir()):
            raise CloneError(f"Target directory is not empty: {target_path}")

    result = {
        "target": str(target_path),
        "url": url,
        "branch": branch,
        "metadata_dir": meta,
        "dry_run": cfg.dry_run,
    }
    if cfg.dry_run:
        return result

    clone_args = ["clone"]
    if branch:
        clone_args += ["--branch", branch]
    clone_args += ["--", url, str(target_path)]

    cloned = _run_git(clone_args, cfg.root)
    if cloned.returncode != 0:
        _discard(target_path, pre_existing)
        raise CloneError(f"Clone failed: {cloned.stderr.strip()}")

    try:
        relocate_metadata(target_path, meta)
    except (OSError, SubProjectError) as e:
        _discard(target_path, pre_existing)
        raise CloneError(f"Could not relocate metadata: {e}") from e

    ok, detail = GitStatusProbe().check(target_path, meta)
    if not ok:
        _discard(target_path, pre_existing)
        raise CloneError(f"Cloned sub-project does not work: {detail}")

    return result
