"""
Virtual network gateway module.

Each hub gets an ExpressRoute and a VPN gateway definition, each with its
own public IP. SKUs ending in "AZ" are zone-redundant, which switches the
public IP defaults to a zonal Standard address.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from iac_types import HubNetworkSettings, NormalizedSettings, Resource
from modules.resource_group.resource_group import ResourceGroups, get_resource_group
from utils.errors import require
from utils.gates import deploy_expressroute_gateway, deploy_vpn_gateway
from utils.naming import (
    GATEWAY_SUBNET_NAME,
    child_resource_id,
    custom_setting,
    default_name,
    network_resource_id,
)

ZONE_REDUNDANT_SUFFIX = "AZ"
ALL_ZONES = ["1", "2", "3"]

# gateway type -> name kind, also the custom settings scope
GATEWAY_TYPES = {
    "ExpressRoute": "ergw",
    "Vpn": "vpngw",
}


def is_zone_redundant(sku: str) -> bool:
    return sku.endswith(ZONE_REDUNDANT_SUFFIX)


def _public_ip_defaults(gateway_type: str, sku: str) -> Dict[str, object]:
    zonal = is_zone_redundant(sku)
    if gateway_type == "ExpressRoute":
        return {
            "sku": "Standard",
            "allocation_method": "Static",
            "zones": list(ALL_ZONES) if zonal else [],
        }
    return {
        "sku": "Standard" if zonal else "Basic",
        "allocation_method": "Static" if zonal else "Dynamic",
        "zones": list(ALL_ZONES) if zonal else [],
    }


def provision_gateway_public_ip(
    *, gateway: Resource, gateway_type: str, sku: str, rg_id: str, rg_name: str
) -> Resource:
    name = f"{gateway.name}-pip"
    template: Dict[str, object] = {
        "name": name,
        "resource_group_name": rg_name,
        "location": gateway.location,
        "tags": dict(gateway.template["tags"]),
    }
    template.update(_public_ip_defaults(gateway_type, sku))
    return Resource(
        resource_id=network_resource_id(rg_id, "publicIPAddresses", name),
        name=name,
        managed_by_module=gateway.managed_by_module,
        scope="connectivity",
        location=gateway.location,
        template=template,
        parent_id=rg_id,
    )


def provision_virtual_network_gateway(
    *,
    cfg: NormalizedSettings,
    location: str,
    hub: HubNetworkSettings,
    gateway_type: str,
    groups: ResourceGroups,
    vnet_id: str,
) -> Tuple[Resource, Resource]:
    """Return (gateway, public_ip) for one gateway type at one hub."""
    rg = get_resource_group(groups, "connectivity", location)
    settings = hub.virtual_network_gateway
    if gateway_type == "ExpressRoute":
        sku = settings.gateway_sku_expressroute
        managed = deploy_expressroute_gateway(cfg.enabled, hub)
    else:
        sku = settings.gateway_sku_vpn
        managed = deploy_vpn_gateway(cfg.enabled, hub)

    name = custom_setting(
        cfg,
        "azurerm_virtual_network_gateway",
        GATEWAY_TYPES[gateway_type],
        location,
        "name",
        default_name(cfg, GATEWAY_TYPES[gateway_type], location),
    )
    gateway_id = network_resource_id(rg.resource_id, "virtualNetworkGateways", name)
    public_ip_name = f"{name}-pip"
    gateway = Resource(
        resource_id=gateway_id,
        name=name,
        managed_by_module=managed,
        scope="connectivity",
        location=location,
        template={
            "name": name,
            "resource_group_name": rg.name,
            "location": location,
            "type": gateway_type,
            "vpn_type": settings.vpn_type if gateway_type == "Vpn" else None,
            "sku": sku,
            "enable_bgp": settings.enable_bgp if gateway_type == "Vpn" else False,
            "active_active": settings.active_active,
            "ip_configuration": [
                {
                    "name": "default",
                    "private_ip_address_allocation": "Dynamic",
                    "subnet_id": child_resource_id(
                        vnet_id, "subnets", GATEWAY_SUBNET_NAME
                    ),
                    "public_ip_address_id": network_resource_id(
                        rg.resource_id, "publicIPAddresses", public_ip_name
                    ),
                }
            ],
            "tags": dict(cfg.tags),
        },
        parent_id=rg.resource_id,
    )
    public_ip = provision_gateway_public_ip(
        gateway=gateway,
        gateway_type=gateway_type,
        sku=sku,
        rg_id=rg.resource_id,
        rg_name=rg.name,
    )
    return gateway, public_ip


def provision_gateways(
    *,
    cfg: NormalizedSettings,
    hubs_by_location: Dict[str, HubNetworkSettings],
    groups: ResourceGroups,
    vnet_ids: Dict[str, str],
) -> Tuple[List[Resource], List[Resource]]:
    """Return (gateways, public_ips) across all hubs, ExpressRoute first."""
    gateways: List[Resource] = []
    public_ips: List[Resource] = []
    for location, hub in hubs_by_location.items():
        for gateway_type in GATEWAY_TYPES:
            gateway, public_ip = provision_virtual_network_gateway(
                cfg=cfg,
                location=location,
                hub=hub,
                gateway_type=gateway_type,
                groups=groups,
                vnet_id=require(vnet_ids, location, "virtual network"),
            )
            gateways.append(gateway)
            public_ips.append(public_ip)
    return gateways, public_ips
