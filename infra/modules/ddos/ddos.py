"""
DDoS protection plan module.
"""

from __future__ import annotations

from iac_types import NormalizedSettings, Resource
from modules.resource_group.resource_group import ResourceGroups, get_resource_group
from utils.gates import deploy_ddos_protection_plan
from utils.naming import custom_setting, default_name, network_resource_id


def provision_ddos_protection_plan(
    *, cfg: NormalizedSettings, groups: ResourceGroups
) -> Resource:
    location = cfg.ddos_location
    rg = get_resource_group(groups, "ddos", location)
    name = custom_setting(
        cfg,
        "azurerm_network_ddos_protection_plan",
        "ddos",
        location,
        "name",
        default_name(cfg, "ddos", location),
    )
    return Resource(
        resource_id=network_resource_id(rg.resource_id, "ddosProtectionPlans", name),
        name=name,
        managed_by_module=deploy_ddos_protection_plan(
            cfg.enabled, cfg.settings.ddos_protection_plan
        ),
        scope="ddos",
        location=location,
        template={
            "name": name,
            "resource_group_name": rg.name,
            "location": location,
            "tags": dict(cfg.tags),
        },
        parent_id=rg.resource_id,
    )


def ddos_protection_plan_id(cfg: NormalizedSettings, plan: Resource) -> str:
    """Id hubs link to: the module's plan, or an existing one when not deployed."""
    if not plan.managed_by_module and cfg.existing_ddos_protection_plan_resource_id:
        return cfg.existing_ddos_protection_plan_resource_id
    return plan.resource_id
