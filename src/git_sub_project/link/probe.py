"""Repository probes: does a linked directory work as a repository now?

Two implementations share the same ``check(path, metadata_dir)`` call:

- StructuralProbe re-reads the pointer and metadata layout, no subprocess.
- GitStatusProbe asks git itself, and confirms git resolved the pointer to
  the sub-project's own metadata rather than to an enclosing repository.
"""

import os
import subprocess
from pathlib import Path

from git_sub_project.layout import is_metadata_dir, missing_metadata_entries, pointer_matches, read_pointer

# Variables that would redirect git away from the directory being probed
_GIT_REDIRECT_VARS = ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE", "GIT_PREFIX", "GIT_COMMON_DIR")


def _git_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k not in _GIT_REDIRECT_VARS}


def _run_git(
    args: list[str],
    cwd: Path,
    timeout: int | None = None,
) -> subprocess.CompletedProcess:
    """Run a git command and return the result.

    A missing git binary is reported as a failed process (exit 127)
    rather than raised.
    """
    try:
        return subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=_git_env(),
        )
    except FileNotFoundError as e:
        return subprocess.CompletedProcess(["git"] + args, 127, "", f"git executable not found: {e}")


class StructuralProbe:
    """Check the on-disk layout only."""

    name = "structural"

    def check(self, path: Path, metadata_dir: str) -> tuple[bool, str]:
        content = read_pointer(path)
        if content is None:
            return False, f"{path / '.git'} is not a regular file"
        if not pointer_matches(content, metadata_dir):
            return False, f"unexpected pointer content: {content.strip()!r}"
        if not is_metadata_dir(path / metadata_dir):
            missing = ", ".join(missing_metadata_entries(path / metadata_dir))
            return False, f"{metadata_dir} is missing {missing}"
        return True, ""


class GitStatusProbe:
    """Run ``git status`` inside the directory."""

    name = "git"

    def check(self, path: Path, metadata_dir: str) -> tuple[bool, str]:
        status = _run_git(["status", "--porcelain"], path)
        if status.returncode != 0:
            return False, status.stderr.strip() or f"git status exited {status.returncode}"

        resolved = _run_git(["rev-parse", "--absolute-git-dir"], path)
        if resolved.returncode != 0:
            return False, resolved.stderr.strip() or "git rev-parse failed"

        actual = Path(resolved.stdout.strip()).resolve()
        expected = (path / metadata_dir).resolve()
        if actual != expected:
            return False, f"git resolved {actual} instead of {expected}"
        return True, ""


PROBES = {
    StructuralProbe.name: StructuralProbe,
    GitStatusProbe.name: GitStatusProbe,
}


def make_probe(kind: str):
    """Return a probe instance for a configured probe name."""
    try:
        return PROBES[kind]()
    except KeyError:
        raise ValueError(f"Unknown probe: {kind}. Valid: {', '.join(sorted(PROBES))}") from None
