"""Mask Google Cloud credentials in log records and surfaced gcloud stderr.

gcloud echoes tokens and key material in a few recognisable shapes:
OAuth access tokens (``ya29.``), ``Authorization: Bearer`` headers and
PEM private keys. On top of those, the literal values of the credential
env vars are masked, together with the secret fields of the service
account file that ``GOOGLE_APPLICATION_CREDENTIALS`` points to.
"""

import json
import logging
import os
import re

MASK = "***"

# Env vars whose values are themselves secrets
_TOKEN_ENV_VARS = ("CLOUDSDK_AUTH_ACCESS_TOKEN", "GOOGLE_OAUTH_ACCESS_TOKEN")
# Env vars naming a credentials file; the path and the file's secrets are masked
_CREDENTIAL_FILE_ENV_VARS = ("GOOGLE_APPLICATION_CREDENTIALS", "CLOUDSDK_AUTH_CREDENTIAL_FILE_OVERRIDE")
_CREDENTIAL_FIELDS = ("private_key", "private_key_id", "client_secret", "refresh_token")

_MIN_SECRET_LENGTH = 8

_SHAPES = (
    re.compile(r"-----BEGIN [A-Z ]*PRIVATE KEY-----.*?-----END [A-Z ]*PRIVATE KEY-----", re.DOTALL),
    re.compile(r"(?<=Bearer )[A-Za-z0-9._~+/-]+=*", re.IGNORECASE),
    re.compile(r"\bya29\.[A-Za-z0-9._-]+"),
)


def _credential_file_secrets(path):
    """Secret field values of a service-account / authorized-user JSON file."""
    try:
        with open(os.path.expanduser(path), encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        # unreadable or not JSON: only the path itself is masked
        return set()
    if not isinstance(data, dict):
        return set()
    return {data[k] for k in _CREDENTIAL_FIELDS if isinstance(data.get(k), str)}


class SecretRedactor:
    """Replaces known secret values and credential-shaped text with ``***``."""

    def __init__(self, values=()):
        # Longest first so a secret containing another is fully masked
        self.values = sorted({v for v in values if len(v) >= _MIN_SECRET_LENGTH}, key=len, reverse=True)

    @classmethod
    def from_environment(cls, environ=None):
        environ = os.environ if environ is None else environ
        values = {environ.get(var, "") for var in _TOKEN_ENV_VARS}
        for var in _CREDENTIAL_FILE_ENV_VARS:
            path = environ.get(var, "")
            if path:
                values.add(path)
                values |= _credential_file_secrets(path)
        return cls(values)

    def redact(self, text):
        for value in self.values:
            text = text.replace(value, MASK)
        for shape in _SHAPES:
            text = shape.sub(MASK, text)
        return text


_redactor = None


def get_redactor():
    """Process-wide redactor, built from the environment on first use."""
    global _redactor
    if _redactor is None:
        _redactor = SecretRedactor.from_environment()
    return _redactor


def reset_redactor():
    """Forget the cached redactor so the next call re-reads the environment."""
    global _redactor
    _redactor = None


def redact_secrets(text):
    return get_redactor().redact(text)


class SecretRedactingFilter(logging.Filter):
    """Masks secrets in a record's message and string arguments."""

    def filter(self, record):
        redactor = get_redactor()
        record.msg = redactor.redact(str(record.msg))
        if isinstance(record.args, dict):
            record.args = {k: redactor.redact(v) if isinstance(v, str) else v for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(redactor.redact(a) if isinstance(a, str) else a for a in record.args)
        return True
