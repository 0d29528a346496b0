"""Interactive single-choice instance picker."""

import logging
import sys

import inquirer
from rich.prompt import IntPrompt

from gcloud_ssh.provisioning.types import Selection
from gcloud_ssh.ui.banner import selection_label

logger = logging.getLogger(__name__)


def inquirer_prompt(labels):
    """Arrow-key menu; returns the chosen index, or None if dismissed."""
    questions = [
        inquirer.List(
            "instance",
            message="Please select a VM to connect to",
            choices=[(label, index) for index, label in enumerate(labels)],
            default=0,
        )
    ]
    answers = inquirer.prompt(questions, raise_keyboard_interrupt=True)
    if not answers:
        return None
    return answers["instance"]


def make_numbered_prompt(renderer):
    """Fallback for non-interactive stdin: list the instances, read a number."""

    def prompt(labels):
        renderer.info("Please select a VM to connect to:")
        renderer.choices(labels)
        choice = IntPrompt.ask(
            "Number",
            console=renderer.console,
            choices=[str(i) for i in range(1, len(labels) + 1)],
            show_choices=False,
        )
        return choice - 1

    return prompt


def default_prompt(renderer):
    if sys.stdin.isatty() and sys.stdout.isatty():
        return inquirer_prompt
    return make_numbered_prompt(renderer)


def select_instance(catalog, prompt) -> Selection:
    """Ask the operator to pick one instance from *catalog*.

    An empty catalog returns Selection.empty() without prompting. Ctrl+C,
    end of input, or a dismissed menu returns Selection.cancelled(). The
    prompt is asked exactly once.
    """
    if not catalog:
        return Selection.empty()

    labels = [selection_label(inst) for inst in catalog]
    try:
        index = prompt(labels)
    except (KeyboardInterrupt, EOFError):
        logger.debug("Selection cancelled by operator")
        return Selection.cancelled()

    if index is None or not 0 <= index < len(catalog):
        return Selection.cancelled()
    return Selection.chosen(catalog[index])
