"""CLI entry point for pagegit."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pagegit",
        description="Publish the Published notes of a markdown vault to a git repository",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to the vault to publish (default: current directory)",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Local store holding the cloned repository (default: ~/.pagegit/store)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: ~/.pagegit/config.yml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v INFO, -vv DEBUG, -vvv also git wire traffic)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        "sync",
        help="Clone or pull the remote, stage published notes, commit and push",
    )
    subparsers.add_parser(
        "clear-cache",
        help="Wipe the local store, forcing a fresh clone on next sync",
    )
    configure = subparsers.add_parser(
        "configure",
        help="Set remote settings (shows current settings when no option is given)",
    )
    configure.add_argument("--git-url", help="HTTPS URL of the remote repository")
    configure.add_argument("--git-token", help="Personal access token used to authenticate")
    configure.add_argument("--username", help="Name used as commit author")
    configure.add_argument("--author-email", help="Email used as commit author")
    configure.add_argument("--branch", help="Branch to clone (default: remote HEAD)")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    settings_kwargs: dict = {}
    if args.vault:
        settings_kwargs["vault_root"] = args.vault
    if args.store:
        settings_kwargs["store_root"] = args.store
    if args.config:
        settings_kwargs["config_file"] = args.config
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    if args.command == "configure":
        from .cli.configure import run_configure

        exit_code = run_configure(
            settings,
            git_url=args.git_url,
            git_token=args.git_token,
            username=args.username,
            author_email=args.author_email,
            branch=args.branch,
        )
    elif args.command == "clear-cache":
        from .cli.clear_cache import run_clear_cache

        exit_code = run_clear_cache(settings)
    else:
        from .cli.sync import run_sync

        exit_code = run_sync(settings)

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
