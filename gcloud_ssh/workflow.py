"""Provisioning workflow: key pair → instance list → pick → deploy key → ssh command.

Steps run one after another and are never retried. Every step either
advances the state or ends the run:

    START ─▶ KEY_READY ─▶ LISTED ─▶ SELECTED ─▶ DEPLOYED ─▶ DONE
      └──────────┴───────────┴──────────┴──────────▶ ABORTED(reason)

Key, catalog and deployment failures abort with exit status 1. An empty
catalog or a cancelled selection aborts with exit status 0. A missing
external IP still reaches DONE; it is reported instead of a command line.
An interrupt while a gcloud command is running aborts with 130.
"""

import logging

from gcloud_ssh.errors import CatalogCommandError, CatalogError, KeyPairError, NoExternalAddressError
from gcloud_ssh.provisioning.catalog import list_instances
from gcloud_ssh.provisioning.connection import compose_connection_command
from gcloud_ssh.provisioning.deployer import deploy_key
from gcloud_ssh.provisioning.keys import ensure_key_pair, read_public_key
from gcloud_ssh.provisioning.types import SelectionStatus, WorkflowResult, WorkflowState
from gcloud_ssh.redact import redact_secrets
from gcloud_ssh.ui.selector import default_prompt, select_instance

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


class ProvisioningWorkflow:
    """Drives one run of the provisioning steps.

    Args:
        run_cmd: callable(list[str]) -> CommandResult, the only way gcloud is reached
        renderer: Renderer used for every message shown to the operator
        settings: Settings for this run
        username: local login name used in the final ssh command
        prompt: callable(labels) -> index | None; defaults to the interactive menu
        dry_run: run_cmd only prints commands, so no generated key is expected on disk
    """

    def __init__(self, run_cmd, renderer, settings, username, prompt=None, dry_run=False):
        self.run_cmd = run_cmd
        self.renderer = renderer
        self.settings = settings
        self.username = username
        self.prompt = prompt or default_prompt(renderer)
        self.dry_run = dry_run
        self.state = WorkflowState.START
        self.history = [WorkflowState.START]

    def _advance(self, state):
        logger.debug(f"workflow: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _abort(self, reason, exit_code, selection=None):
        self._advance(WorkflowState.ABORTED)
        return WorkflowResult(
            state=WorkflowState.ABORTED,
            exit_code=exit_code,
            reason=reason,
            selection=selection,
            history=list(self.history),
        )

    def _interrupted(self):
        self.renderer.warning("Interrupted.")
        return self._abort("interrupted", EXIT_INTERRUPTED)

    # ── steps ─────────────────────────────────────────────────────

    def run(self) -> WorkflowResult:
        settings = self.settings

        # 1. Key pair
        self.renderer.section("SSH KEY")
        try:
            with self.renderer.spinner("Checking for an SSH key pair..."):
                pair = ensure_key_pair(
                    settings.key_path,
                    self.run_cmd,
                    project=settings.project,
                    gcloud_bin=settings.gcloud_bin,
                    dry_run=self.dry_run,
                )
        except KeyPairError as e:
            self.renderer.error(redact_secrets(str(e)))
            return self._abort(str(e), EXIT_FAILED)
        except KeyboardInterrupt:
            return self._interrupted()
        self.renderer.success(f"SSH key pair ready: {pair.public_path}")
        self._advance(WorkflowState.KEY_READY)

        # 2. Instance catalog
        self.renderer.section("VM INSTANCES")
        try:
            with self.renderer.spinner("Fetching VM instances..."):
                catalog = list_instances(self.run_cmd, project=settings.project, gcloud_bin=settings.gcloud_bin)
        except CatalogCommandError as e:
            self.renderer.error("Failed to list VM instances:")
            self.renderer.error(redact_secrets(e.stderr.strip()) or "gcloud exited with a non-zero status")
            return self._abort(str(e), EXIT_FAILED)
        except CatalogError as e:
            self.renderer.error(str(e))
            return self._abort(str(e), EXIT_FAILED)
        except KeyboardInterrupt:
            return self._interrupted()
        self._advance(WorkflowState.LISTED)

        # 3. Selection
        if catalog:
            self.renderer.success(f"Found {len(catalog)} VM instance(s).")
        selection = select_instance(catalog, self.prompt)
        self._advance(WorkflowState.SELECTED)
        if selection.is_none:
            if selection.status is SelectionStatus.EMPTY:
                self.renderer.warning("No VM instances found in the active project.")
                self.renderer.info("Create one with 'gcloud compute instances create' or pick another project with --project.")
            else:
                self.renderer.warning("No VM selected. Nothing was changed.")
            return self._abort("no selection", EXIT_OK, selection)
        instance = selection.instance

        # 4. Deploy the key
        self.renderer.section("KEY DEPLOYMENT")
        try:
            public_key = read_public_key(pair)
        except KeyPairError as e:
            self.renderer.error(str(e))
            return self._abort(str(e), EXIT_FAILED, selection)
        try:
            with self.renderer.spinner(f"Copying SSH key to VM: {instance.name}..."):
                outcome = deploy_key(
                    instance, public_key, self.run_cmd, project=settings.project, gcloud_bin=settings.gcloud_bin
                )
        except KeyboardInterrupt:
            return self._interrupted()
        if not outcome.succeeded:
            diagnostic = redact_secrets(outcome.diagnostic or "")
            self.renderer.error(f"Failed to copy SSH key to VM {instance.name}:")
            self.renderer.error(diagnostic)
            return self._abort(diagnostic, EXIT_FAILED, selection)
        self.renderer.success(f"SSH key successfully copied to VM: {instance.name}")
        self._advance(WorkflowState.DEPLOYED)

        # 5. Connection command
        command = None
        try:
            command = compose_connection_command(instance, self.username)
        except NoExternalAddressError:
            self.renderer.no_external_address(instance)
        else:
            self.renderer.connection_info(instance, command)
        self._advance(WorkflowState.DONE)

        return WorkflowResult(
            state=WorkflowState.DONE,
            exit_code=EXIT_OK,
            command=command,
            selection=selection,
            history=list(self.history),
        )
