"""
DNS module.

Derives private DNS zones from the Private Link service table, explicitly
listed public/private zones, and the virtual network links from every
private zone to the hub and spoke networks.

A private zone is deployed when DNS is deployed and at least one service
that owns the zone is enabled. Explicitly listed zones only need DNS.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from iac_types import NormalizedSettings, Resource
from modules.dns.private_link_zones import (
    PRIVATE_DNS_ZONE_SERVICES,
    PRIVATE_LINK_SERVICE_ZONES,
    expand_zone,
)
from modules.resource_group.resource_group import ResourceGroups, get_resource_group
from utils.errors import require
from utils.gates import deploy_dns, deploy_private_dns_zone, deploy_zone_link
from utils.naming import (
    child_resource_id,
    network_resource_id,
    virtual_network_link_name,
)


def service_enabled(cfg: NormalizedSettings, service: str) -> bool:
    # Services left out of the settings keep the table default: enabled.
    return cfg.settings.dns.enable_private_link_by_service.get(service, True)


def private_dns_zone_services(cfg: NormalizedSettings) -> Dict[str, Tuple[str, ...]]:
    """Expanded zone fqdn -> owning services, in table order."""
    zones: Dict[str, Tuple[str, ...]] = {}
    for zone, services in PRIVATE_DNS_ZONE_SERVICES.items():
        for fqdn in expand_zone(zone, cfg.private_link_locations):
            zones[fqdn] = zones.get(fqdn, ()) + services
    return zones


def _zone(
    *,
    cfg: NormalizedSettings,
    fqdn: str,
    resource_type: str,
    rg_id: str,
    rg_name: str,
    managed: bool,
) -> Resource:
    return Resource(
        resource_id=network_resource_id(rg_id, resource_type, fqdn),
        name=fqdn,
        managed_by_module=managed,
        scope="dns",
        location=cfg.dns_location,
        template={
            "name": fqdn,
            "resource_group_name": rg_name,
            "tags": dict(cfg.tags),
        },
        parent_id=rg_id,
    )


def provision_dns_zones(
    *, cfg: NormalizedSettings, groups: ResourceGroups
) -> Tuple[List[Resource], List[Resource]]:
    """Return (public_zones, private_zones)."""
    rg = get_resource_group(groups, "dns", cfg.dns_location)
    dns = cfg.settings.dns
    dns_enabled = deploy_dns(cfg.enabled, dns)

    private_gates: Dict[str, bool] = {}
    for fqdn, services in private_dns_zone_services(cfg).items():
        private_gates[fqdn] = deploy_private_dns_zone(
            dns_enabled, any(service_enabled(cfg, s) for s in services)
        )
    for fqdn in dns.private_dns_zones:
        private_gates[fqdn] = dns_enabled

    private_zones = [
        _zone(
            cfg=cfg,
            fqdn=fqdn,
            resource_type="privateDnsZones",
            rg_id=rg.resource_id,
            rg_name=rg.name,
            managed=managed,
        )
        for fqdn, managed in private_gates.items()
    ]
    public_zones = [
        _zone(
            cfg=cfg,
            fqdn=fqdn,
            resource_type="dnsZones",
            rg_id=rg.resource_id,
            rg_name=rg.name,
            managed=dns_enabled,
        )
        for fqdn in dict.fromkeys(dns.public_dns_zones)
    ]
    return public_zones, private_zones


def spoke_virtual_network_ids(
    cfg: NormalizedSettings, hub_vnet_ids: List[str]
) -> List[str]:
    """Every spoke id declared on a hub plus extra ids to link, deduplicated."""
    ids: List[str] = []
    for hub in cfg.settings.hub_networks:
        ids.extend(hub.spoke_virtual_network_resource_ids)
    ids.extend(cfg.settings.dns.virtual_network_resource_ids_to_link)
    return [i for i in dict.fromkeys(ids) if i and i not in hub_vnet_ids]


def _link(zone: Resource, virtual_network_id: str, managed: bool) -> Resource:
    name = virtual_network_link_name(virtual_network_id)
    return Resource(
        resource_id=child_resource_id(zone.resource_id, "virtualNetworkLinks", name),
        name=name,
        managed_by_module=managed,
        scope="dns",
        location=zone.location,
        template={
            "name": name,
            "resource_group_name": zone.template["resource_group_name"],
            "private_dns_zone_name": zone.name,
            "virtual_network_id": virtual_network_id,
            "registration_enabled": False,
            "tags": dict(zone.template["tags"]),
        },
        parent_id=zone.resource_id,
    )


def provision_zone_links(
    *,
    cfg: NormalizedSettings,
    private_zones: List[Resource],
    hub_vnet_ids: List[str],
) -> List[Resource]:
    dns = cfg.settings.dns
    spoke_ids = spoke_virtual_network_ids(cfg, hub_vnet_ids)
    links: List[Resource] = []
    for zone in private_zones:
        for vnet_id in hub_vnet_ids:
            links.append(
                _link(
                    zone,
                    vnet_id,
                    deploy_zone_link(
                        zone.managed_by_module,
                        dns.enable_private_dns_zone_virtual_network_link_on_hubs,
                    ),
                )
            )
        for vnet_id in spoke_ids:
            links.append(
                _link(
                    zone,
                    vnet_id,
                    deploy_zone_link(
                        zone.managed_by_module,
                        dns.enable_private_dns_zone_virtual_network_link_on_spokes,
                    ),
                )
            )
    return links


def private_dns_zone_ids_by_service(
    cfg: NormalizedSettings, private_zones: List[Resource]
) -> Dict[str, str]:
    """First zone id per enabled Private Link service, for policy parameters."""
    zone_ids = {zone.name: zone.resource_id for zone in private_zones}
    by_service: Dict[str, str] = {}
    for service, zones in PRIVATE_LINK_SERVICE_ZONES.items():
        if not service_enabled(cfg, service):
            continue
        fqdn = expand_zone(zones[0], cfg.private_link_locations)[0]
        by_service[service] = require(zone_ids, fqdn, "private DNS zone")
    return by_service
