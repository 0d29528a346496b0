#!/usr/bin/env python3
"""gcloud-ssh — CLI entrypoint."""

import argparse

from gcloud_ssh import __version__
from gcloud_ssh.commands.connect import register_connect_arguments
from gcloud_ssh.logging_setup import setup_cli_logging


def main():
    parser = argparse.ArgumentParser(
        prog="gcloud-ssh",
        description="Set up SSH access to a Google Compute Engine VM and print the ssh command",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    register_connect_arguments(parser)

    args = parser.parse_args()
    setup_cli_logging()
    args.func(args)


if __name__ == "__main__":
    main()
