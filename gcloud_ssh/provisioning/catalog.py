"""Instance catalog: list VMs through gcloud and decode the JSON response.

The decoder is strict about types but tolerant about absence: every nested
block gcloud may omit (``networkInterfaces``, ``accessConfigs``, ``natIP``,
``networkIP``) is optional, while anything present with the wrong shape
makes the whole response malformed.

Only the first network interface and its first access config are
consulted, which is where gcloud puts the primary external IP.
"""

import json
import logging

from gcloud_ssh.errors import CatalogCommandError, MalformedCatalogError
from gcloud_ssh.provisioning.gcloud import GCLOUD_BIN, _gcloud_list_instances_cmd
from gcloud_ssh.provisioning.types import Instance

logger = logging.getLogger(__name__)


def zone_name(zone):
    """Shorten a zone URL (``.../projects/p/zones/us-central1-a``) to its name."""
    return zone.rstrip("/").rsplit("/", 1)[-1] or zone


def _optional_list(entry, key, where):
    value = entry.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedCatalogError(f"{where}: '{key}' must be a list, got {type(value).__name__}")
    return value


def _optional_str(entry, key, where):
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedCatalogError(f"{where}: '{key}' must be a string, got {type(value).__name__}")
    return value or None


def _required_str(entry, key, where):
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedCatalogError(f"{where}: missing '{key}'")
    return value


def _first_dict(items, where):
    if not items:
        return None
    first = items[0]
    if not isinstance(first, dict):
        raise MalformedCatalogError(f"{where}: expected an object, got {type(first).__name__}")
    return first


def _decode_instance(entry, index) -> Instance:
    where = f"instance #{index}"
    if not isinstance(entry, dict):
        raise MalformedCatalogError(f"{where}: expected an object, got {type(entry).__name__}")

    name = _required_str(entry, "name", where)
    zone = zone_name(_required_str(entry, "zone", where))

    internal = external = None
    interface = _first_dict(_optional_list(entry, "networkInterfaces", where), f"{where} networkInterfaces[0]")
    if interface is not None:
        internal = _optional_str(interface, "networkIP", f"{where} networkInterfaces[0]")
        access = _first_dict(
            _optional_list(interface, "accessConfigs", f"{where} networkInterfaces[0]"),
            f"{where} accessConfigs[0]",
        )
        if access is not None:
            external = _optional_str(access, "natIP", f"{where} accessConfigs[0]")

    return Instance(name=name, zone=zone, internal_address=internal, external_address=external)


def parse_instances(text) -> list[Instance]:
    """Decode ``gcloud compute instances list --format=json`` output.

    gcloud prints ``[]`` for a project without instances, so empty output
    is malformed like any other unreadable text. Order is preserved.

    Raises:
        MalformedCatalogError: output is not the expected JSON shape.
    """
    if not text.strip():
        raise MalformedCatalogError("Failed to parse VM instance JSON data: gcloud printed nothing")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedCatalogError(f"Failed to parse VM instance JSON data: {e}") from e
    if not isinstance(data, list):
        raise MalformedCatalogError(f"Expected a JSON list of instances, got {type(data).__name__}")
    return [_decode_instance(entry, i) for i, entry in enumerate(data)]


def list_instances(run_cmd, project=None, gcloud_bin=GCLOUD_BIN) -> list[Instance]:
    """List the VM instances in the active (or given) project.

    Raises:
        CatalogCommandError: gcloud exited with a non-zero status.
        MalformedCatalogError: gcloud succeeded but printed something unreadable.
    """
    result = run_cmd(_gcloud_list_instances_cmd(project, gcloud_bin=gcloud_bin))
    if not result.ok:
        raise CatalogCommandError(result.stderr)

    instances = parse_instances(result.stdout)
    logger.debug(f"Decoded {len(instances)} instance(s)")
    return instances
