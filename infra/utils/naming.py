"""
Naming and resource id helpers.

Every id is built by appending a provider path segment to the parent id, so
child ids always extend their parent's id byte for byte.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from iac_types import NormalizedSettings

NETWORK_PROVIDER = "providers/Microsoft.Network"
ZERO_SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"

GATEWAY_SUBNET_NAME = "GatewaySubnet"
FIREWALL_SUBNET_NAME = "AzureFirewallSubnet"


def first_non_empty(*values: Optional[str]) -> str:
    for value in values:
        if value:
            return value
    return ""


def format_suffix(resource_suffix: str) -> str:
    return f"-{resource_suffix}" if resource_suffix else ""


def default_name(cfg: NormalizedSettings, kind: str, location: str) -> str:
    """`{prefix}-{kind}-{location}{suffix}`, e.g. contoso-hub-eastus-dev."""
    return f"{cfg.resource_prefix}-{kind}-{location}{cfg.resource_suffix}"


def custom_setting(
    cfg: NormalizedSettings,
    resource_type: str,
    scope: str,
    location: str,
    key: str,
    default: Any,
) -> Any:
    """Look up custom_settings_by_resource_type[type][scope][location][key]."""
    by_scope: Dict[str, Any] = (
        cfg.custom_settings_by_resource_type.get(resource_type) or {}
    )
    by_location = by_scope.get(scope) or {}
    value = (by_location.get(location) or {}).get(key)
    return default if value in (None, "") else value


def subscription_segment(resource_id: str) -> str:
    parts = resource_id.split("/")
    return parts[2] if len(parts) > 2 else ""


def stable_uuid(resource_id: str) -> str:
    """Same value as Terraform's uuidv5("url", resource_id)."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, resource_id))


def virtual_network_link_name(virtual_network_id: str) -> str:
    return f"{subscription_segment(virtual_network_id)}-{stable_uuid(virtual_network_id)}"


def peering_name(remote_virtual_network_id: str) -> str:
    return f"peering-{stable_uuid(remote_virtual_network_id)}"


def resource_group_id(subscription_id: str, name: str) -> str:
    return f"/subscriptions/{subscription_id}/resourceGroups/{name}"


def network_resource_id(rg_id: str, resource_type: str, name: str) -> str:
    return f"{rg_id}/{NETWORK_PROVIDER}/{resource_type}/{name}"


def child_resource_id(parent_id: str, child_type: str, name: str) -> str:
    return f"{parent_id}/{child_type}/{name}"
