"""
Settings normalization and hub location partitioning.

Resolves coalesced values (locations, prefix/suffix, subscription id) once,
before any resource is derived.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from iac_types import (
    ConnectivitySettings,
    GlobalDefaults,
    HubNetworkSettings,
    NormalizedSettings,
)
from modules.dns.private_link_zones import PRIVATE_LINK_SERVICE_ZONES
from utils.errors import DuplicateLocationError
from utils.naming import (
    FIREWALL_SUBNET_NAME,
    GATEWAY_SUBNET_NAME,
    ZERO_SUBSCRIPTION_ID,
    first_non_empty,
    format_suffix,
)
from utils.validation import (
    validate_location,
    validate_private_link_services,
    validate_root_id,
    validate_subnet_names,
    validate_subscription_id,
)

logger = logging.getLogger(__name__)


def normalize_settings(
    settings: ConnectivitySettings, defaults: GlobalDefaults
) -> NormalizedSettings:
    root_id = validate_root_id(defaults.root_id)
    subscription_id = validate_subscription_id(defaults.subscription_id)
    default_location = validate_location(defaults.location, "location")
    validate_private_link_services(
        settings.dns.enable_private_link_by_service, PRIVATE_LINK_SERVICE_ZONES
    )
    for hub in settings.hub_networks:
        validate_subnet_names(
            [subnet.name for subnet in hub.subnets],
            reserved_subnet_names(hub),
            hub_location(hub, default_location),
        )

    dns_location = first_non_empty(settings.dns.location, default_location)
    private_link_locations = [
        loc for loc in settings.dns.private_link_locations if loc
    ] or [dns_location]

    return NormalizedSettings(
        enabled=defaults.enabled,
        root_id=root_id,
        subscription_id=subscription_id or ZERO_SUBSCRIPTION_ID,
        default_location=default_location,
        resource_prefix=first_non_empty(defaults.resource_prefix, root_id),
        resource_suffix=format_suffix(defaults.resource_suffix),
        tags=dict(defaults.tags),
        ddos_location=first_non_empty(
            settings.ddos_protection_plan.location, default_location
        ),
        dns_location=dns_location,
        private_link_locations=private_link_locations,
        existing_ddos_protection_plan_resource_id=(
            defaults.existing_ddos_protection_plan_resource_id
        ),
        custom_settings_by_resource_type=dict(
            defaults.custom_settings_by_resource_type
        ),
        settings=settings,
    )


def hub_location(hub: HubNetworkSettings, default_location: str) -> str:
    return first_non_empty(hub.location, default_location)


def partition_by_location(
    hub_networks: List[HubNetworkSettings], default_location: str
) -> Dict[str, HubNetworkSettings]:
    """Map each hub to its effective location, rejecting duplicates."""
    partition: Dict[str, HubNetworkSettings] = {}
    for hub in hub_networks:
        location = hub_location(hub, default_location)
        if location in partition:
            raise DuplicateLocationError(location)
        partition[location] = hub
    logger.debug("Hub network locations: %s", ", ".join(partition) or "<none>")
    return partition


def reserved_subnet_names(hub: HubNetworkSettings) -> List[str]:
    """Reserved subnets the hub adds for its gateway and firewall."""
    names: List[str] = []
    if hub.virtual_network_gateway.address_prefix:
        names.append(GATEWAY_SUBNET_NAME)
    if hub.azure_firewall.address_prefix:
        names.append(FIREWALL_SUBNET_NAME)
    return names
