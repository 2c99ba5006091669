# -*- mode: python; coding: utf-8 -*-
# Copyright 2024 the lfs-rsync-agent developers.
# Licensed under the BSD License.

"""Module for the git-lfs-rsync-agent command line script.

git-lfs launches the agent once per transfer batch and talks to it over
standard input and output. Configure a repository to use it with::

    git config lfs.standalonetransferagent rsync
    git config lfs.customtransfer.rsync.path git-lfs-rsync-agent
    git config lfs.customtransfer.rsync.args /backup/lfs

"""

import argparse
import io
import sys

from pydantic import ValidationError

from . import __version__
from .agent import TransferAgent
from .logger import log, setup_logging
from .settings import load_settings


def die(fmt, *args):
    """Exit the script with the specifying error string.

    This function will exit the interpreter with code 1 and print the specified
    error message.

    Parameters
    ----------
    fmt : str
        String to be appended to the error message.
    args : str
        If `fmt` contains string substitution, args are unpacked for this purpose.

    Returns
    -------
    None

    """
    if not len(args):
        text = str(fmt)
    else:
        text = fmt % args
    print("error:", text, file=sys.stderr)
    sys.exit(1)


def tolerant_lines(stream):
    """Make a text stream survive input that is not valid UTF-8.

    Undecodable bytes come through as lone surrogates, so the line holding
    them is rejected as malformed instead of ending the read loop.
    """
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape")

    return stream


def generate_parser():
    """Make a git-lfs-rsync-agent ArgumentParser.

    Parameters
    ----------
    None

    Returns
    -------
    ap : ArgumentParser
    """
    ap = argparse.ArgumentParser(
        description="git-lfs custom transfer agent that stores large files with rsync"
    )
    ap.add_argument(
        "-V",
        "--version",
        action="version",
        version="git-lfs-rsync-agent {}".format(__version__),
        help="Show the agent version and exit.",
    )
    ap.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="JSON settings file. Overrides $LFS_RSYNC_AGENT_CONFIG.",
    )
    # Optional here so that a missing remote is reported to git-lfs at init.
    ap.add_argument(
        "remote",
        metavar="REMOTE",
        nargs="?",
        default="",
        help="Where large files are stored, e.g. /backup/lfs or host:/srv/lfs.",
    )

    return ap


def main(argv=None, stdin=None, stdout=None):
    parser = generate_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (OSError, ValidationError) as e:
        die("could not load settings: %s", e)

    setup_logging(settings)

    agent = TransferAgent(
        remote=args.remote,
        transfer_manager=settings.build_transfer_manager(),
        output=stdout if stdout is not None else sys.stdout,
        temp_dir=settings.temp_dir,
        temp_prefix=settings.temp_prefix,
    )

    agent.run(tolerant_lines(stdin if stdin is not None else sys.stdin))

    log.debug("Agent loop finished, exiting.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
