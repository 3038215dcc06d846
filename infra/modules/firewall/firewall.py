"""
Azure Firewall module.

Creates the firewall, its policy and its public IP per hub. The firewall's
zones come from three independent flags; a non-empty zone list makes the
public IP zonal as well.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from iac_types import FirewallSettings, HubNetworkSettings, NormalizedSettings, Resource
from modules.resource_group.resource_group import ResourceGroups, get_resource_group
from utils.errors import require
from utils.gates import deploy_azure_firewall
from utils.naming import (
    FIREWALL_SUBNET_NAME,
    child_resource_id,
    custom_setting,
    default_name,
    network_resource_id,
)


def availability_zones(settings: FirewallSettings) -> List[str]:
    flags = (
        ("1", settings.availability_zone_1),
        ("2", settings.availability_zone_2),
        ("3", settings.availability_zone_3),
    )
    return [zone for zone, enabled in flags if enabled]


def provision_firewall_policy(
    *,
    cfg: NormalizedSettings,
    location: str,
    settings: FirewallSettings,
    rg_id: str,
    rg_name: str,
    managed: bool,
) -> Resource:
    name = custom_setting(
        cfg,
        "azurerm_firewall_policy",
        "connectivity",
        location,
        "name",
        default_name(cfg, "fw-policy", location),
    )
    return Resource(
        resource_id=network_resource_id(rg_id, "firewallPolicies", name),
        name=name,
        managed_by_module=managed,
        scope="connectivity",
        location=location,
        template={
            "name": name,
            "resource_group_name": rg_name,
            "location": location,
            "sku": settings.sku_tier,
            "base_policy_id": settings.base_policy_id or None,
            "threat_intelligence_mode": settings.threat_intelligence_mode,
            "threat_intelligence_allowlist": list(
                settings.threat_intelligence_allowlist
            ),
            "private_ip_ranges": list(settings.private_ip_ranges),
            "dns": {
                "proxy_enabled": settings.enable_dns_proxy,
                "servers": list(settings.dns_servers),
            },
            "tags": dict(cfg.tags),
        },
        parent_id=rg_id,
    )


def provision_firewall(
    *,
    cfg: NormalizedSettings,
    location: str,
    hub: HubNetworkSettings,
    groups: ResourceGroups,
    vnet_id: str,
) -> Tuple[Resource, Resource, Resource]:
    """Return (firewall, firewall_policy, public_ip) for one hub."""
    rg = get_resource_group(groups, "connectivity", location)
    settings = hub.azure_firewall
    managed = deploy_azure_firewall(cfg.enabled, hub)
    zones = availability_zones(settings)

    policy = provision_firewall_policy(
        cfg=cfg,
        location=location,
        settings=settings,
        rg_id=rg.resource_id,
        rg_name=rg.name,
        managed=managed,
    )

    name = custom_setting(
        cfg,
        "azurerm_firewall",
        "connectivity",
        location,
        "name",
        default_name(cfg, "fw", location),
    )
    public_ip_name = f"{name}-pip"
    public_ip = Resource(
        resource_id=network_resource_id(
            rg.resource_id, "publicIPAddresses", public_ip_name
        ),
        name=public_ip_name,
        managed_by_module=managed,
        scope="connectivity",
        location=location,
        template={
            "name": public_ip_name,
            "resource_group_name": rg.name,
            "location": location,
            "sku": "Standard",
            "allocation_method": "Static",
            "zones": list(zones),
            "tags": dict(cfg.tags),
        },
        parent_id=rg.resource_id,
    )

    firewall = Resource(
        resource_id=network_resource_id(rg.resource_id, "azureFirewalls", name),
        name=name,
        managed_by_module=managed,
        scope="connectivity",
        location=location,
        template={
            "name": name,
            "resource_group_name": rg.name,
            "location": location,
            "sku_name": "AZFW_VNet",
            "sku_tier": settings.sku_tier,
            "firewall_policy_id": policy.resource_id,
            "zones": list(zones),
            "ip_configuration": [
                {
                    "name": "default",
                    "subnet_id": child_resource_id(
                        vnet_id, "subnets", FIREWALL_SUBNET_NAME
                    ),
                    "public_ip_address_id": public_ip.resource_id,
                }
            ],
            "tags": dict(cfg.tags),
        },
        parent_id=rg.resource_id,
    )
    return firewall, policy, public_ip


def provision_firewalls(
    *,
    cfg: NormalizedSettings,
    hubs_by_location: Dict[str, HubNetworkSettings],
    groups: ResourceGroups,
    vnet_ids: Dict[str, str],
) -> Tuple[List[Resource], List[Resource], List[Resource]]:
    """Return (firewalls, firewall_policies, public_ips) across all hubs."""
    firewalls: List[Resource] = []
    policies: List[Resource] = []
    public_ips: List[Resource] = []
    for location, hub in hubs_by_location.items():
        firewall, policy, public_ip = provision_firewall(
            cfg=cfg,
            location=location,
            hub=hub,
            groups=groups,
            vnet_id=require(vnet_ids, location, "virtual network"),
        )
        firewalls.append(firewall)
        policies.append(policy)
        public_ips.append(public_ip)
    return firewalls, policies, public_ips
