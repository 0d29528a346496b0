"""Exception types for the provisioning workflow."""


class GcloudSshError(Exception):
    """Base class for all gcloud-ssh failures."""


# ── Key pair ──────────────────────────────────────────────────────


class KeyPairError(GcloudSshError):
    """The local key pair could not be prepared or read."""


class KeyGenerationError(KeyPairError):
    """gcloud failed to generate a key pair."""

    def __init__(self, stderr):
        self.stderr = stderr
        super().__init__(f"No SSH key found and failed to generate one: {stderr.strip()}")


# ── Instance catalog ──────────────────────────────────────────────


class CatalogError(GcloudSshError):
    """The instance list could not be obtained."""


class CatalogCommandError(CatalogError):
    """The list-instances command exited with a non-zero status."""

    def __init__(self, stderr):
        self.stderr = stderr
        super().__init__(f"Failed to list VM instances: {stderr.strip()}")


class MalformedCatalogError(CatalogError):
    """The list-instances command succeeded but its output could not be decoded."""


# ── Deployment / composition ──────────────────────────────────────


class DeploymentError(GcloudSshError):
    """The public key could not be embedded into a remote command."""


class CompositionError(GcloudSshError):
    """A connection command could not be derived for an instance."""


class NoExternalAddressError(CompositionError):
    """The instance has no external IP address."""

    def __init__(self, instance_name):
        self.instance_name = instance_name
        super().__init__(f"VM '{instance_name}' does not have an external IP address")
