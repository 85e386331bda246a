"""Link outcomes and their aggregation into one report."""

import os
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

# Outcome kinds
LINKED = "Linked"
RELINKED = "Relinked"
ALREADY_LINKED = "AlreadyLinked"
NOT_FOUND = "NotFound"
NO_METADATA = "NoMetadata"
BLOCKED = "Blocked"
CONFLICT = "Conflict"
VERIFY_FAILED = "VerifyFailed"

SUCCESS_OUTCOMES = {LINKED, RELINKED, ALREADY_LINKED}
FAILURE_OUTCOMES = {NOT_FOUND, NO_METADATA, BLOCKED, CONFLICT, VERIFY_FAILED}

_LABELS = {
    LINKED: "Linked",
    RELINKED: "Relinked",
    ALREADY_LINKED: "Already linked",
    NOT_FOUND: "Not found",
    NO_METADATA: "No metadata",
    BLOCKED: "Blocked",
    CONFLICT: "Conflict",
    VERIFY_FAILED: "Verify failed",
}

_DRY_RUN_LABELS = {LINKED: "Would link", RELINKED: "Would relink"}


def display_path(path: Path, root: Path | None = None) -> str:
    """Render path relative to root when it lies inside it."""
    if root is not None:
        try:
            rel = os.path.relpath(path, root)
        except ValueError:
            return str(path)
        if rel != ".." and not rel.startswith(".." + os.sep):
            return rel
    return str(path)


@dataclass
class LinkResult:
    """Outcome of linking one directory."""

    path: Path
    outcome: str
    message: str = ""
    detail: str = ""
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.outcome in SUCCESS_OUTCOMES

    def line(self, root: Path | None = None, verbose: bool = False) -> str:
        shown = display_path(self.path, root)
        if self.ok:
            label = _LABELS[self.outcome]
            if self.dry_run:
                label = _DRY_RUN_LABELS.get(self.outcome, label)
            return f"  {label}: {shown}"

        text = f"  ERROR {_LABELS[self.outcome]}: {shown}"
        if self.message:
            text += f" ({self.message})"
        if verbose and self.detail:
            text += "\n" + "\n".join(f"      {d}" for d in self.detail.splitlines())
        return text


@dataclass
class DiscoveryResult:
    """Every outcome produced by one traversal of a root directory."""

    root: Path
    results: list[LinkResult] = field(default_factory=list)
    walk_errors: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def passed(self) -> bool:
        return not self.walk_errors and all(r.ok for r in self.results)

    @property
    def failures(self) -> list[LinkResult]:
        return [r for r in self.results if not r.ok]

    def counts(self) -> dict[str, int]:
        return dict(Counter(r.outcome for r in self.results))

    def by_path(self) -> dict[Path, str]:
        return {r.path: r.outcome for r in self.results}

    def summary(self, verbose: bool = False) -> str:
        lines = [r.line(self.root, verbose) for r in self.results]
        for err in self.walk_errors:
            lines.append(f"  ERROR Walk: {err}")
        if lines:
            lines.append("")

        counts = self.counts()
        if not self.results and not self.walk_errors:
            lines.append("Nothing to link.")
        elif not self.passed:
            failed = len(self.failures) + len(self.walk_errors)
            lines.append(f"{failed} failure(s) across {len(self.results)} sub-project(s).")
        else:
            done = counts.get(LINKED, 0) + counts.get(RELINKED, 0)
            already = counts.get(ALREADY_LINKED, 0)
            if self.dry_run:
                lines.append(f"Nothing written ({done} would be linked, {already} already linked).")
            else:
                lines.append(f"All sub-projects linked ({done} linked, {already} already linked).")
        return "\n".join(lines)
