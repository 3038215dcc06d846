"""
Resource group module.

Resolves one resource group per (scope, location): connectivity per hub
location, ddos and dns at their single configured location.
"""

from __future__ import annotations

from typing import Dict, Tuple

from iac_types import HubNetworkSettings, NormalizedSettings, ResourceGroupConfig
from utils.errors import MissingReferenceError
from utils.gates import deploy_ddos_protection_plan, deploy_dns, deploy_hub_network
from utils.naming import custom_setting, default_name, resource_group_id

SCOPES = ("connectivity", "ddos", "dns")

ResourceGroups = Dict[Tuple[str, str], ResourceGroupConfig]


def _resource_group(
    cfg: NormalizedSettings, scope: str, location: str, managed: bool
) -> ResourceGroupConfig:
    name = custom_setting(
        cfg,
        "azurerm_resource_group",
        scope,
        location,
        "name",
        default_name(cfg, scope, location),
    )
    tags = custom_setting(
        cfg, "azurerm_resource_group", scope, location, "tags", cfg.tags
    )
    return ResourceGroupConfig(
        scope=scope,
        location=location,
        name=name,
        resource_id=resource_group_id(cfg.subscription_id, name),
        tags=dict(tags),
        managed_by_module=managed,
    )


def resolve_resource_groups(
    cfg: NormalizedSettings, hubs_by_location: Dict[str, HubNetworkSettings]
) -> ResourceGroups:
    groups: ResourceGroups = {}
    for location, hub in hubs_by_location.items():
        groups[("connectivity", location)] = _resource_group(
            cfg, "connectivity", location, deploy_hub_network(cfg.enabled, hub)
        )
    groups[("ddos", cfg.ddos_location)] = _resource_group(
        cfg,
        "ddos",
        cfg.ddos_location,
        deploy_ddos_protection_plan(cfg.enabled, cfg.settings.ddos_protection_plan),
    )
    groups[("dns", cfg.dns_location)] = _resource_group(
        cfg, "dns", cfg.dns_location, deploy_dns(cfg.enabled, cfg.settings.dns)
    )
    return groups


def get_resource_group(
    groups: ResourceGroups, scope: str, location: str
) -> ResourceGroupConfig:
    if (scope, location) not in groups:
        raise MissingReferenceError("resource group", f"{scope}/{location}")
    return groups[(scope, location)]
