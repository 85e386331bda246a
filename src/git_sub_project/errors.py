"""Exception hierarchy for sub-project operations.

Linking never raises for a bad candidate; it reports an Outcome instead.
These exceptions cover the creation wrappers and configuration loading.
"""


class SubProjectError(RuntimeError):
    """Base class for every error raised by git_sub_project."""


class ConfigError(SubProjectError):
    """The settings file or a settings value is invalid."""


class CloneError(SubProjectError):
    """clone_sub_project could not produce a linked sub-project."""


class InitError(SubProjectError):
    """init_sub_project could not convert the directory."""
