"""Connect command: run the provisioning workflow from the command line."""

import logging
import sys

from gcloud_ssh.config import load_settings
from gcloud_ssh.provisioning.connection import resolve_local_username
from gcloud_ssh.provisioning.shell import make_run_cmd
from gcloud_ssh.ui.render import Renderer
from gcloud_ssh.workflow import ProvisioningWorkflow

logger = logging.getLogger(__name__)


def handle_connect(args):
    """CLI handler for the default gcloud-ssh run."""
    settings = load_settings(
        args.config,
        key_path=args.key_path,
        project=args.project,
        timeout=args.timeout,
        show_banner=False if args.no_banner else None,
        tutorial=False if args.no_banner else None,
        show_tips=False if args.no_banner else None,
    )
    renderer = Renderer(show_banner=settings.show_banner, tutorial=settings.tutorial, show_tips=settings.show_tips)
    renderer.welcome()

    username = args.user or resolve_local_username()
    run_cmd = make_run_cmd(dry_run=args.dry_run, timeout=settings.timeout)

    result = ProvisioningWorkflow(run_cmd, renderer, settings, username, dry_run=args.dry_run).run()
    logger.debug(f"Run finished in state '{result.state.value}' with exit code {result.exit_code}")
    sys.exit(result.exit_code)


def register_connect_arguments(parser):
    """Register the options of the connect workflow on *parser*."""
    parser.add_argument("--key-path", default=None, help="SSH private key path; the public key is <path>.pub (default: ~/.ssh/id_rsa)")
    parser.add_argument("--project", default=None, help="GCP project to use instead of the gcloud default")
    parser.add_argument("--user", default=None, help="Username for the printed ssh command (default: local user)")
    parser.add_argument("--timeout", type=int, default=None, help="Seconds to wait for each gcloud command (default: 120)")
    parser.add_argument("--config", default=None, help="YAML config file (default: ~/.config/gcloud-ssh/config.yaml)")
    parser.add_argument("--no-banner", action="store_true", help="Skip the banner, tutorial and keyboard tips")
    parser.add_argument("--dry-run", action="store_true", help="Print gcloud commands without executing")
    parser.set_defaults(func=handle_connect)
