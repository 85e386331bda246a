"""Load and validate sub-project settings.

Settings come from three layers, later ones winning:
defaults < YAML settings file < command-line overrides.

Example .sub-project.yaml:

    metadata_dir: .git-sub-project
    probe: git            # or "structural" (no subprocess)
    nested: true          # link sub-projects inside sub-projects
    exclude: [node_modules, .venv]
    jobs: 4
    repair_conflicts: false
"""

import warnings
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from git_sub_project.errors import ConfigError
from git_sub_project.layout import DEFAULT_METADATA_DIR, POINTER_FILE
from git_sub_project.paths import config_path

VALID_PROBES = {"git", "structural"}

# Keys a settings file may set; root and dry_run are per-invocation only
_FILE_KEYS = {"metadata_dir", "probe", "nested", "exclude", "jobs", "repair_conflicts"}


@dataclass(frozen=True)
class LinkConfig:
    """Everything the link engine needs, passed explicitly."""

    root: Path = field(default_factory=Path.cwd)
    metadata_dir: str = DEFAULT_METADATA_DIR
    dry_run: bool = False
    probe: str = "git"
    nested: bool = True
    exclude: tuple[str, ...] = ()
    jobs: int = 1
    repair_conflicts: bool = False

    def with_overrides(self, **overrides) -> "LinkConfig":
        """Return a copy with every non-None override applied, then validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "root" in changes:
            changes["root"] = Path(changes["root"])
        if "exclude" in changes:
            changes["exclude"] = tuple(changes["exclude"])
        updated = replace(self, **changes)
        validate_config(updated)
        return updated


def validate_config(config: LinkConfig) -> None:
    """Raise ConfigError if any setting is unusable."""
    name = config.metadata_dir
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("metadata_dir must be a non-empty directory name")
    if name in (POINTER_FILE, ".", "..") or "/" in name or "\\" in name:
        raise ConfigError(f"metadata_dir '{name}' must be a plain name other than '{POINTER_FILE}'")

    if not isinstance(config.probe, str) or config.probe not in VALID_PROBES:
        raise ConfigError(
            f"Unknown probe '{config.probe}'. Valid: {', '.join(sorted(VALID_PROBES))}"
        )

    if isinstance(config.jobs, bool) or not isinstance(config.jobs, int) or config.jobs < 1:
        raise ConfigError(f"jobs must be a positive integer, got {config.jobs!r}")

    for flag in ("nested", "dry_run", "repair_conflicts"):
        if not isinstance(getattr(config, flag), bool):
            raise ConfigError(f"{flag} must be true or false")

    if not all(isinstance(entry, str) for entry in config.exclude):
        raise ConfigError("exclude must be a list of directory names")


def read_config_file(path: Path | str) -> dict:
    """Read a YAML settings file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed settings dict (empty for an empty file).

    Raises:
        ConfigError: If the file is missing, unreadable, malformed, or not a mapping.
    """
    settings_path = Path(path)
    try:
        with open(settings_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Settings file not found: {settings_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed settings file {settings_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read settings file {settings_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {settings_path} is not a YAML mapping")
    return data


def load_config(
    root: Path | str | None = None,
    path: Path | str | None = None,
    **overrides,
) -> LinkConfig:
    """Build a LinkConfig from defaults, the settings file and overrides.

    Args:
        root: Invocation root. Defaults to the current directory.
        path: Explicit settings file. Resolved via paths.config_path() if None.
        **overrides: LinkConfig fields; None values are ignored.

    Returns:
        Validated LinkConfig.
    """
    root_path = Path(root) if root else Path.cwd()
    settings_path = Path(path) if path else config_path(root_path)

    settings: dict = {}
    if settings_path is not None:
        settings = read_config_file(settings_path)

    unknown = sorted(set(settings) - _FILE_KEYS)
    if unknown:
        warnings.warn(f"Ignoring unknown settings in {settings_path}: {', '.join(unknown)}")

    from_file = {k: v for k, v in settings.items() if k in _FILE_KEYS}
    exclude = from_file.get("exclude")
    if exclude is not None and not isinstance(exclude, list):
        raise ConfigError("exclude must be a list of directory names")

    config = LinkConfig(root=root_path)
    return config.with_overrides(**from_file).with_overrides(**overrides)
