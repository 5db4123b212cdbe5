"""
Command-line entry point.

    mediarefresh plex   [FILE]      refresh the Plex entry for FILE (whole section if omitted)
    mediarefresh bazarr FILE        search subtitle providers for the episode in FILE
    mediarefresh sonarr FOLDER      refresh a Sonarr series and rename its files

Exit codes: 0 success, 2 not found / skipped, 1 failure.
"""

import argparse
import sys

import questionary

from . import __version__
from .bazarr import Bazarr
from .commands import CommandRunner
from .config import Settings
from .console import Log, set_default
from .models import Outcome
from .paths import file_name
from .plex import Plex
from .sonarr import Sonarr
from .workflows import bazarr_search, plex_refresh, sonarr_refresh_rename


def handle_interrupt(signal_received=None, frame=None):
    """Ctrl+C while waiting on a service: stop polling and exit non-zero."""
    Log().console.print("\n[bold red]Interrupted, nothing further sent to the server.[/]")
    sys.exit(Outcome.FAILURE.exit_code)


def confirm_renames(items):
    """Lets the user untick files before Sonarr renames them. All are ticked to start with."""
    choices = [
        questionary.Choice(f"{file_name(i.existing_path)}  ->  {file_name(i.new_path)}", value=i, checked=True)
        for i in items
    ]
    selected = questionary.checkbox(
        "Select files to rename:",
        choices=choices,
        style=questionary.Style([('answer', 'fg:green'), ('highlighted', 'fg:cyan bold')])
    ).ask()
    # None means the prompt was cancelled
    return selected or []


# --- Subcommands ---

def run_plex(args, settings, log):
    if not settings.plex_token:
        log.warn("No Plex token configured (PLEX_TOKEN)")
    with Plex(settings.plex_url, settings.plex_token, timeout=settings.request_timeout, log=log) as plex:
        return plex_refresh(plex, settings.plex_section_id, args.path,
                            settings.source_root, settings.target_root, log=log)


def run_bazarr(args, settings, log):
    with Bazarr(settings.bazarr_url, settings.bazarr_api_key, timeout=settings.request_timeout, log=log) as bazarr:
        return bazarr_search(bazarr, args.path, settings.source_root, settings.target_root, log=log)


def run_sonarr(args, settings, log):
    with Sonarr(settings.sonarr_url, settings.sonarr_api_key, timeout=settings.request_timeout, log=log) as sonarr:
        runner = CommandRunner.for_client(sonarr, poll_interval=settings.poll_interval,
                                          timeout=settings.command_timeout)
        select = confirm_renames if args.confirm else None
        return sonarr_refresh_rename(sonarr, args.folder, runner=runner, select=select, log=log)


def build_parser():
    parser = argparse.ArgumentParser(prog="mediarefresh", description="Refresh and rename media in Plex, Sonarr and Bazarr.")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    parser.add_argument('--source-root', dest='source_root', help='Root the given paths start with')
    parser.add_argument('--target-root', dest='target_root', help='Root the media server sees instead')
    parser.add_argument('--timeout', dest='command_timeout', type=float, help='Seconds to wait for a command')
    parser.add_argument('--poll-interval', dest='poll_interval', type=float, help='Seconds between status checks')
    sub = parser.add_subparsers(dest='service', required=True)

    p = sub.add_parser('plex', help='Refresh the Plex library entry for a file')
    p.add_argument('path', nargs='?', help='Media file (omit to refresh the whole section)')
    p.add_argument('--url', dest='plex_url')
    p.add_argument('--token', dest='plex_token')
    p.add_argument('--section', dest='plex_section_id')
    p.set_defaults(func=run_plex)

    b = sub.add_parser('bazarr', help='Trigger a subtitle search for a file')
    b.add_argument('path', nargs='?', help='Media file')
    b.add_argument('--url', dest='bazarr_url')
    b.add_argument('--api-key', dest='bazarr_api_key')
    b.set_defaults(func=run_bazarr)

    s = sub.add_parser('sonarr', help='Refresh a series and rename its files')
    s.add_argument('folder', help='Series (or season) folder')
    s.add_argument('--url', dest='sonarr_url')
    s.add_argument('--api-key', dest='sonarr_api_key')
    s.add_argument('--confirm', action='store_true', help='Pick which files to rename before renaming')
    s.set_defaults(func=run_sonarr)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.load(args)
    except ValueError as e:
        Log().error(str(e))
        return Outcome.FAILURE.exit_code
    log = set_default(Log(verbose=settings.verbose))

    log.header(f"{args.service.capitalize()}")
    try:
        outcome = args.func(args, settings, log)
    except KeyboardInterrupt:
        handle_interrupt()

    if outcome is Outcome.SUCCESS:
        log.ok("Done")
    elif outcome is Outcome.NOT_FOUND:
        log.warn("Nothing matched, skipped")
    else:
        log.error("Failed")
    return outcome.exit_code


def run():
    sys.exit(main())
