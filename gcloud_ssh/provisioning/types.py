"""Shared data types for the provisioning workflow."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple


class CommandResult(NamedTuple):
    """Captured outcome of one external command."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class KeyPair:
    """Local SSH key pair location."""

    private_path: Path
    public_path: Path
    exists: bool


@dataclass(frozen=True)
class Instance:
    """A Compute Engine VM as reported by ``gcloud compute instances list``."""

    name: str
    zone: str
    internal_address: str | None = None
    external_address: str | None = None

    @property
    def reachable(self) -> bool:
        """True if the instance can be addressed directly over the internet."""
        return self.external_address is not None


class SelectionStatus(Enum):
    CHOSEN = "chosen"
    EMPTY = "empty"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Selection:
    """Result of asking the operator to pick an instance.

    Use the constructors below; a selection is either a chosen instance
    or one of the explicit "none" outcomes.
    """

    status: SelectionStatus
    instance: Instance | None = None

    @classmethod
    def chosen(cls, instance: Instance) -> "Selection":
        return cls(SelectionStatus.CHOSEN, instance)

    @classmethod
    def empty(cls) -> "Selection":
        return cls(SelectionStatus.EMPTY)

    @classmethod
    def cancelled(cls) -> "Selection":
        return cls(SelectionStatus.CANCELLED)

    @property
    def is_none(self) -> bool:
        return self.status is not SelectionStatus.CHOSEN


@dataclass(frozen=True)
class DeploymentOutcome:
    """Result of pushing the public key to an instance."""

    succeeded: bool
    diagnostic: str | None = None


class WorkflowState(Enum):
    START = "start"
    KEY_READY = "key_ready"
    LISTED = "listed"
    SELECTED = "selected"
    DEPLOYED = "deployed"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class WorkflowResult:
    """Terminal state of one provisioning run."""

    state: WorkflowState
    exit_code: int = 0
    reason: str | None = None
    command: str | None = None
    selection: Selection | None = None
    history: list[WorkflowState] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.state is WorkflowState.ABORTED
