"""gcloud-ssh: provision SSH access to Google Compute Engine VMs."""

__version__ = "0.1.0"
