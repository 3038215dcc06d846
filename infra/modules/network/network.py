"""
Network module.

Derives hub virtual networks, their subnets (including the reserved
GatewaySubnet and AzureFirewallSubnet) and subnet NSG/route table
associations.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Tuple

from iac_types import HubNetworkSettings, NormalizedSettings, Resource, SubnetSettings
from modules.resource_group.resource_group import ResourceGroups, get_resource_group
from utils.gates import deploy_hub_network
from utils.naming import (
    FIREWALL_SUBNET_NAME,
    GATEWAY_SUBNET_NAME,
    child_resource_id,
    custom_setting,
    default_name,
    network_resource_id,
)


def _with_ddos_protection_plan(vnet: Resource, plan_id: str) -> Resource:
    template = dict(vnet.template)
    template["ddos_protection_plan"] = {"id": plan_id, "enable": True}
    return replace(vnet, template=template)


def provision_virtual_network(
    *,
    cfg: NormalizedSettings,
    location: str,
    hub: HubNetworkSettings,
    groups: ResourceGroups,
    ddos_plan_id: str,
) -> Resource:
    rg = get_resource_group(groups, "connectivity", location)
    name = custom_setting(
        cfg,
        "azurerm_virtual_network",
        "connectivity",
        location,
        "name",
        default_name(cfg, "hub", location),
    )
    vnet = Resource(
        resource_id=network_resource_id(rg.resource_id, "virtualNetworks", name),
        name=name,
        managed_by_module=deploy_hub_network(cfg.enabled, hub),
        scope="connectivity",
        location=location,
        template={
            "name": name,
            "resource_group_name": rg.name,
            "location": location,
            "address_space": list(hub.address_space),
            "bgp_community": hub.bgp_community or None,
            "dns_servers": list(hub.dns_servers),
            "tags": dict(cfg.tags),
            "ddos_protection_plan": None,
        },
        parent_id=rg.resource_id,
    )
    if hub.link_to_ddos_protection_plan:
        vnet = _with_ddos_protection_plan(vnet, ddos_plan_id)
    return vnet


def hub_subnets(hub: HubNetworkSettings) -> List[SubnetSettings]:
    """Declared subnets plus the reserved subnets the hub services need."""
    subnets = list(hub.subnets)
    gateway_prefix = hub.virtual_network_gateway.address_prefix
    if gateway_prefix:
        subnets.append(
            SubnetSettings(name=GATEWAY_SUBNET_NAME, address_prefixes=[gateway_prefix])
        )
    firewall_prefix = hub.azure_firewall.address_prefix
    if firewall_prefix:
        subnets.append(
            SubnetSettings(
                name=FIREWALL_SUBNET_NAME, address_prefixes=[firewall_prefix]
            )
        )
    return subnets


def provision_subnets(
    *, vnet: Resource, hub: HubNetworkSettings, rg_name: str
) -> List[Resource]:
    return [
        Resource(
            resource_id=child_resource_id(vnet.resource_id, "subnets", subnet.name),
            name=subnet.name,
            managed_by_module=vnet.managed_by_module,
            scope="connectivity",
            location=vnet.location,
            template={
                "name": subnet.name,
                "resource_group_name": rg_name,
                "virtual_network_name": vnet.name,
                "address_prefixes": list(subnet.address_prefixes),
                "location": vnet.location,
                "network_security_group_id": subnet.network_security_group_id,
                "route_table_id": subnet.route_table_id,
            },
            parent_id=vnet.resource_id,
        )
        for subnet in hub_subnets(hub)
    ]


def _association(subnet: Resource, key: str, target_id: str) -> Resource:
    # Association ids are the subnet id itself.
    return Resource(
        resource_id=subnet.resource_id,
        name=subnet.name,
        managed_by_module=subnet.managed_by_module,
        scope=subnet.scope,
        location=subnet.location,
        template={"subnet_id": subnet.resource_id, key: target_id},
        parent_id=subnet.parent_id,
    )


def provision_subnet_associations(
    subnets: List[Resource],
) -> Tuple[List[Resource], List[Resource]]:
    """Return (nsg_associations, route_table_associations)."""
    nsg_associations = [
        _association(s, "network_security_group_id", s.template["network_security_group_id"])
        for s in subnets
        if s.template["network_security_group_id"]
    ]
    route_table_associations = [
        _association(s, "route_table_id", s.template["route_table_id"])
        for s in subnets
        if s.template["route_table_id"]
    ]
    return nsg_associations, route_table_associations


def provision_network(
    *,
    cfg: NormalizedSettings,
    hubs_by_location: Dict[str, HubNetworkSettings],
    groups: ResourceGroups,
    ddos_plan_id: str,
) -> Tuple[List[Resource], List[Resource], List[Resource], List[Resource]]:
    """Provision hub networking and return (vnets, subnets, nsg_assocs, rt_assocs)."""
    vnets: List[Resource] = []
    subnets: List[Resource] = []
    for location, hub in hubs_by_location.items():
        rg = get_resource_group(groups, "connectivity", location)
        vnet = provision_virtual_network(
            cfg=cfg,
            location=location,
            hub=hub,
            groups=groups,
            ddos_plan_id=ddos_plan_id,
        )
        vnets.append(vnet)
        subnets.extend(provision_subnets(vnet=vnet, hub=hub, rg_name=rg.name))

    nsg_associations, route_table_associations = provision_subnet_associations(subnets)
    return vnets, subnets, nsg_associations, route_table_associations
