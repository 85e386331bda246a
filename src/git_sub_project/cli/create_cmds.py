"""Clone and init CLI commands."""

import argparse
from pathlib import Path


def _print_ignore_hint(sub_project: str, root: Path) -> None:
    from git_sub_project.layout import POINTER_FILE
    from git_sub_project.link.result import display_path

    shown = display_path(Path(sub_project), root)
    print("\n  Next steps:")
    print(f"    echo '{shown}/{POINTER_FILE}' >> .gitignore")
    print(f"    git add .gitignore {shown}")
    print("  After cloning the parent elsewhere, restore the pointer with:")
    print("    git link-sub-project --all")


def cmd_clone(args: argparse.Namespace) -> int:
    from git_sub_project.config import load_config
    from git_sub_project.create import clone_sub_project
    from git_sub_project.errors import SubProjectError

    try:
        config = load_config(root=Path.cwd(), path=getattr(args, "config", None), dry_run=args.dry_run)
        result = clone_sub_project(args.url, args.target, branch=args.branch, config=config)
    except SubProjectError as e:
        print(f"  ERROR: {e}")
        return 1

    prefix = "[DRY RUN] " if result["dry_run"] else ""
    branch = f" (branch {result['branch']})" if result["branch"] else ""
    print(f"  {prefix}Cloned {result['url']}{branch}")
    print(f"  Sub-project: {result['target']}")
    print(f"  Metadata: {result['metadata_dir']}/")
    if not result["dry_run"]:
        _print_ignore_hint(result["target"], config.root)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    from git_sub_project.config import load_config
    from git_sub_project.create import init_sub_project
    from git_sub_project.errors import SubProjectError

    try:
        config = load_config(root=Path.cwd(), path=getattr(args, "config", None), dry_run=args.dry_run)
        result = init_sub_project(args.directory, remote_url=args.remote_url, config=config)
    except SubProjectError as e:
        print(f"  ERROR: {e}")
        return 1

    prefix = "[DRY RUN] " if result["dry_run"] else ""
    print(f"  {prefix}Initialized sub-project: {result['directory']}")
    print(f"  Metadata: {result['metadata_dir']}/")
    if result["remote"]:
        print(f"  Remote: origin -> {result['remote']}")
    if not result["dry_run"]:
        print(f"  Staged: {result['staged']} file(s), not committed")
        _print_ignore_hint(result["directory"], config.root)
    return 0
