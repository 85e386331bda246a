"""Discover sub-projects under a root directory and link each of them."""

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from git_sub_project.config import LinkConfig
from git_sub_project.layout import POINTER_FILE
from git_sub_project.link.linker import link
from git_sub_project.link.probe import make_probe
from git_sub_project.link.result import DiscoveryResult


def find_candidates(
    root: Path | str,
    config: LinkConfig | None = None,
) -> tuple[list[Path], list[str]]:
    """Walk root and find every directory holding a metadata directory.

    Structure: <root>/**/<dir>/.git-sub-project/

    Never descends into .git or metadata directories, nor into directory
    names listed in config.exclude. Symlinked directories are not followed.
    With config.nested False, traversal stops at each candidate.

    Args:
        root: Directory to search, itself included.
        config: Engine settings. Defaults to LinkConfig().

    Returns:
        (sorted candidate paths, walk error messages) tuple.
    """
    cfg = config or LinkConfig()
    meta = cfg.metadata_dir
    skip = {POINTER_FILE, meta, *cfg.exclude}

    candidates: list[Path] = []
    errors: list[str] = []

    def on_error(err: OSError) -> None:
        errors.append(f"{err.filename}: {err.strerror}")

    for current, dirs, _ in os.walk(root, topdown=True, onerror=on_error):
        current_path = Path(current)

        if meta in dirs:
            candidates.append(current_path)
            if not cfg.nested:
                dirs[:] = []
                continue

        dirs[:] = sorted(d for d in dirs if d not in skip)

    candidates.sort()
    return candidates, errors


def discover_and_link(
    root: Path | str | None = None,
    config: LinkConfig | None = None,
    probe=None,
) -> DiscoveryResult:
    """Link every sub-project found under root.

    One candidate's failure never stops the others; the result holds an
    outcome per candidate, ordered by path. Finding nothing is a success.

    Args:
        root: Directory to search. Defaults to config.root; relative paths
            resolve against config.root.
        config: Engine settings. Defaults to LinkConfig().
        probe: Shared probe instance. Built from config.probe if None.

    Returns:
        DiscoveryResult with per-candidate outcomes and walk errors.
    """
    cfg = config or LinkConfig()
    root_path = Path(root).expanduser() if root else cfg.root
    if not root_path.is_absolute():
        root_path = cfg.root / root_path

    if not root_path.is_dir():
        return DiscoveryResult(
            root_path, walk_errors=[f"{root_path}: not a directory"], dry_run=cfg.dry_run,
        )

    candidates, errors = find_candidates(root_path, cfg)
    checker = probe or make_probe(cfg.probe)

    if cfg.jobs > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=cfg.jobs) as pool:
            results = list(pool.map(lambda c: link(c, cfg, checker), candidates))
    else:
        results = [link(c, cfg, checker) for c in candidates]

    results.sort(key=lambda r: r.path)
    return DiscoveryResult(root_path, results, errors, dry_run=cfg.dry_run)
