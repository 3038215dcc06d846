"""
Virtual network peering module.

One-way peerings from each hub to each of its spokes. Peering names are
derived from the spoke id only, so they stay stable without a counter.
"""

from __future__ import annotations

from typing import Dict, List

from iac_types import HubNetworkSettings, NormalizedSettings, Resource
from modules.resource_group.resource_group import ResourceGroups, get_resource_group
from utils.errors import require
from utils.gates import deploy_dns, deploy_outbound_virtual_network_peering
from utils.naming import child_resource_id, peering_name


def provision_peerings(
    *,
    cfg: NormalizedSettings,
    hubs_by_location: Dict[str, HubNetworkSettings],
    groups: ResourceGroups,
    vnets: List[Resource],
) -> List[Resource]:
    dns_enabled = deploy_dns(cfg.enabled, cfg.settings.dns)
    vnets_by_location = {vnet.location: vnet for vnet in vnets}
    peerings: List[Resource] = []
    for location, hub in hubs_by_location.items():
        rg = get_resource_group(groups, "connectivity", location)
        vnet = require(vnets_by_location, location, "virtual network")
        managed = deploy_outbound_virtual_network_peering(dns_enabled, hub)
        spoke_ids = [
            i for i in dict.fromkeys(hub.spoke_virtual_network_resource_ids) if i
        ]
        for spoke_id in spoke_ids:
            name = peering_name(spoke_id)
            peerings.append(
                Resource(
                    resource_id=child_resource_id(
                        vnet.resource_id, "virtualNetworkPeerings", name
                    ),
                    name=name,
                    managed_by_module=managed,
                    scope="connectivity",
                    location=location,
                    template={
                        "name": name,
                        "resource_group_name": rg.name,
                        "virtual_network_name": vnet.name,
                        "remote_virtual_network_id": spoke_id,
                        "allow_virtual_network_access": True,
                        "allow_forwarded_traffic": True,
                        "allow_gateway_transit": True,
                        "use_remote_gateways": False,
                    },
                    parent_id=vnet.resource_id,
                )
            )
    return peerings
