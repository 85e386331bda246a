"""Link CLI commands."""

import argparse
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LinkSingle:
    path: str


@dataclass(frozen=True)
class LinkAll:
    root: str


@dataclass(frozen=True)
class ShowHelp:
    pass


def link_request(args: argparse.Namespace) -> LinkSingle | LinkAll | ShowHelp:
    """Collapse parsed link arguments into one request."""
    if args.help:
        return ShowHelp()
    if args.all:
        return LinkAll(args.path or ".")
    return LinkSingle(args.path or ".")


def _load_link_config(args: argparse.Namespace):
    from git_sub_project.config import load_config

    return load_config(
        root=Path.cwd(),
        path=getattr(args, "config", None),
        dry_run=args.dry_run,
        probe=args.probe,
        nested=args.nested,
        exclude=args.exclude,
        jobs=args.jobs,
        repair_conflicts=args.force,
    )


def cmd_link(args: argparse.Namespace) -> int:
    from git_sub_project.errors import SubProjectError
    from git_sub_project.link import discover_and_link, link
    from git_sub_project.link.result import display_path

    request = link_request(args)
    if isinstance(request, ShowHelp):
        args.print_help()
        return 0

    try:
        config = _load_link_config(args)
    except SubProjectError as e:
        print(f"ERROR: {e}")
        return 1

    if isinstance(request, LinkAll):
        result = discover_and_link(request.root, config)
        prefix = "[DRY RUN] " if config.dry_run else ""
        print(f"{prefix}Linking sub-projects under {display_path(result.root, config.root)}\n")
        print(result.summary(verbose=args.verbose))
        return 0 if result.passed else 1

    single = link(request.path, config)
    print(single.line(config.root, verbose=args.verbose))
    return 0 if single.ok else 1
