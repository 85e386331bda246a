"""Link a single sub-project directory by restoring its pointer file.

The linker never raises for a bad candidate. Every path ends in exactly one
outcome from link.result, and only an UNLINKED directory (or a conflicting
pointer when repair_conflicts is on) is ever written to.
"""

from pathlib import Path

from git_sub_project import layout
from git_sub_project.config import LinkConfig
from git_sub_project.link.probe import make_probe
from git_sub_project.link.result import (
    ALREADY_LINKED,
    BLOCKED,
    CONFLICT,
    LINKED,
    NO_METADATA,
    NOT_FOUND,
    RELINKED,
    VERIFY_FAILED,
    LinkResult,
)


def _resolve_target(path: Path | str, config: LinkConfig) -> Path:
    target = Path(path).expanduser()
    if not target.is_absolute():
        target = config.root / target
    return target


def _describe_conflict(target: Path, metadata_dir: str) -> str:
    content = layout.read_pointer(target)
    if content is None:
        if (target / layout.POINTER_FILE).is_file():
            return f"{layout.POINTER_FILE} exists but could not be read"
        return f"{layout.POINTER_FILE} exists but is not a regular file"
    first = content.strip().splitlines()[0] if content.strip() else "<empty>"
    return f"{layout.POINTER_FILE} contains {first!r}, expected {layout.pointer_line(metadata_dir).strip()!r}"


def link(path: Path | str, config: LinkConfig | None = None, probe=None) -> LinkResult:
    """Validate one directory and write its pointer file if it is unlinked.

    Args:
        path: Directory to link. Relative paths resolve against config.root.
        config: Engine settings. Defaults to LinkConfig().
        probe: Object with check(path, metadata_dir). Built from config.probe if None.

    Returns:
        LinkResult with one of Linked, Relinked, AlreadyLinked, NotFound,
        NoMetadata, Blocked, Conflict, VerifyFailed.
    """
    cfg = config or LinkConfig()
    meta = cfg.metadata_dir
    target = _resolve_target(path, cfg)

    state = layout.classify(target, meta)

    if state == layout.MISSING:
        reason = "not a directory" if target.exists() else "directory does not exist"
        return LinkResult(target, NOT_FOUND, reason)

    if state == layout.BLOCKED:
        return LinkResult(
            target, BLOCKED,
            f"{layout.POINTER_FILE} is a real directory; refusing to overwrite it",
        )

    if state == layout.NO_METADATA:
        metadata_path = target / meta
        if not metadata_path.is_dir():
            return LinkResult(target, NO_METADATA, f"no {meta}/ directory")
        missing = ", ".join(layout.missing_metadata_entries(metadata_path))
        return LinkResult(target, NO_METADATA, f"{meta}/ is missing {missing}")

    if state == layout.LINKED:
        return LinkResult(target, ALREADY_LINKED)

    outcome = LINKED
    if state == layout.CONFLICT:
        repairable = cfg.repair_conflicts and (target / layout.POINTER_FILE).is_file()
        if not repairable:
            return LinkResult(target, CONFLICT, _describe_conflict(target, meta))
        outcome = RELINKED

    if cfg.dry_run:
        return LinkResult(target, outcome, dry_run=True)

    try:
        layout.write_pointer(target, meta)
    except OSError as e:
        return LinkResult(target, VERIFY_FAILED, "could not write pointer file", detail=str(e))

    checker = probe or make_probe(cfg.probe)
    ok, detail = checker.check(target, meta)
    if not ok:
        # Pointer stays in place for manual diagnosis
        kind = getattr(checker, "name", "repository")
        return LinkResult(target, VERIFY_FAILED, f"{kind} probe failed", detail=detail)

    return LinkResult(target, outcome)
