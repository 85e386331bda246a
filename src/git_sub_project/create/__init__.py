"""Create module — turn a fresh clone or an existing directory into a linked sub-project."""

from git_sub_project.create.clone import clone_sub_project
from git_sub_project.create.init import init_sub_project

__all__ = ["clone_sub_project", "init_sub_project"]
