"""Command-line front end for git sub-projects.

Usage:
    git-sub-project link [<path>] [--dry-run] [--probe git|structural] [--force]
    git-sub-project link --all [<root>] [--no-nested] [--exclude NAME] [--jobs N]
    git-sub-project clone <repo_url> <subdir> [branch] [--dry-run]
    git-sub-project init <directory> [remote_url] [--dry-run]

The same commands are installed as native git commands:
    git link-sub-project [<path> | --all]
    git clone-sub-project <repo_url> <subdir> [branch]
    git init-sub-project <directory> [remote_url]

Exit codes: 0 on success (including "already linked"), 1 on any failure
or unknown argument.
"""

import argparse
import sys

from git_sub_project.cli.create_cmds import cmd_clone, cmd_init
from git_sub_project.cli.link_cmds import cmd_link


class _HelpFormatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):
        if prefix is None:
            prefix = "Usage: "
        return super().add_usage(usage, actions, groups, prefix)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits 1, not 2, on bad arguments."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", default=None,
        help="Path to a settings YAML file (default: .sub-project.yaml)",
    )


def add_link_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-h", "--help", action="store_true",
        help="Show this help message and exit",
    )
    parser.add_argument(
        "path", nargs="?", default=None,
        help="Sub-project to link (default: current directory); with --all, the root to search",
    )
    parser.add_argument(
        "-a", "--all", action="store_true",
        help="Find and link every sub-project below the root",
    )
    parser.add_argument(
        "-n", "--dry-run", action="store_true",
        help="Report what would be linked without writing",
    )
    parser.add_argument(
        "--probe", choices=["git", "structural"], default=None,
        help="How to verify a new link (default: git)",
    )
    parser.add_argument(
        "--force", action="store_const", const=True, default=None,
        help="Rewrite pointer files that point somewhere else",
    )
    parser.add_argument(
        "--no-nested", dest="nested", action="store_const", const=False, default=None,
        help="Do not look for sub-projects inside sub-projects",
    )
    parser.add_argument(
        "--exclude", action="append", default=None, metavar="NAME",
        help="Directory name to skip while searching (repeatable)",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=None,
        help="Link candidates on N worker threads",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Show probe details for failures",
    )
    _add_config_argument(parser)
    parser.set_defaults(handler=cmd_link, print_help=parser.print_help)


def add_clone_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", metavar="repo_url", help="Repository to clone")
    parser.add_argument("target", metavar="subdir", help="Sub-project directory (absent or empty)")
    parser.add_argument("branch", nargs="?", default=None, help="Branch or tag to check out")
    parser.add_argument(
        "-n", "--dry-run", action="store_true",
        help="Validate arguments without cloning",
    )
    _add_config_argument(parser)
    parser.set_defaults(handler=cmd_clone)


def add_init_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", help="Existing directory to convert")
    parser.add_argument("remote_url", nargs="?", default=None, help="URL for the origin remote")
    parser.add_argument(
        "-n", "--dry-run", action="store_true",
        help="Validate arguments without initializing",
    )
    _add_config_argument(parser)
    parser.set_defaults(handler=cmd_init)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="git-sub-project",
        description="Nested independent git repositories via gitdir pointer files",
        formatter_class=_HelpFormatter,
    )
    sub = parser.add_subparsers(dest="command")

    link = sub.add_parser(
        "link", help="Restore sub-project pointer files",
        add_help=False, formatter_class=_HelpFormatter,
    )
    add_link_arguments(link)

    clone = sub.add_parser(
        "clone", help="Clone a repository as a sub-project",
        formatter_class=_HelpFormatter,
    )
    add_clone_arguments(clone)

    init = sub.add_parser(
        "init", help="Convert a directory into a sub-project",
        formatter_class=_HelpFormatter,
    )
    add_init_arguments(init)

    return parser


def build_link_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="git-link-sub-project",
        description="Restore the .git pointer file of sub-projects after a parent clone",
        add_help=False, formatter_class=_HelpFormatter,
    )
    add_link_arguments(parser)
    return parser


def build_clone_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="git-clone-sub-project",
        description="Clone a repository into a sub-project directory",
        formatter_class=_HelpFormatter,
    )
    add_clone_arguments(parser)
    return parser


def build_init_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="git-init-sub-project",
        description="Convert an existing directory into a sub-project",
        formatter_class=_HelpFormatter,
    )
    add_init_arguments(parser)
    return parser


def _run(parser: argparse.ArgumentParser, argv: list[str] | None) -> int:
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)


def main(argv: list[str] | None = None) -> int:
    return _run(build_parser(), argv)


def link_main(argv: list[str] | None = None) -> int:
    return _run(build_link_parser(), argv)


def clone_main(argv: list[str] | None = None) -> int:
    return _run(build_clone_parser(), argv)


def init_main(argv: list[str] | None = None) -> int:
    return _run(build_init_parser(), argv)


if __name__ == "__main__":
    sys.exit(main())
