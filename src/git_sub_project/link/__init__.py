"""Link module — restore sub-project pointer files, one path or a whole tree."""

from git_sub_project.link.linker import link
from git_sub_project.link.discover import discover_and_link, find_candidates
from git_sub_project.link.probe import GitStatusProbe, StructuralProbe, make_probe
from git_sub_project.link.result import DiscoveryResult, LinkResult

__all__ = [
    "link",
    "discover_and_link",
    "find_candidates",
    "GitStatusProbe",
    "StructuralProbe",
    "make_probe",
    "DiscoveryResult",
    "LinkResult",
]
