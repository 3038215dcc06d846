"""
Connectivity stack config helpers.

Runs the full derivation: normalized settings -> resource groups ->
network, gateway, firewall, DDoS, DNS and peering resources -> output
records. Every stage is a pure function of the stages before it.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields
from typing import Any, Dict

from iac_types import ConnectivityOutputs, ConnectivitySettings, GlobalDefaults
from modules.ddos.ddos import ddos_protection_plan_id, provision_ddos_protection_plan
from modules.dns.dns import (
    private_dns_zone_ids_by_service,
    provision_dns_zones,
    provision_zone_links,
)
from modules.firewall.firewall import provision_firewalls
from modules.gateway.gateway import provision_gateways
from modules.network.network import provision_network
from modules.outputs import outputs
from modules.peering.peering import provision_peerings
from modules.resource_group.resource_group import (
    SCOPES,
    get_resource_group,
    resolve_resource_groups,
)
from utils.gates import deploy_dns, deploy_hub_network
from utils.settings import normalize_settings, partition_by_location

logger = logging.getLogger(__name__)


def build_connectivity(
    settings: ConnectivitySettings, defaults: GlobalDefaults
) -> ConnectivityOutputs:
    """Derive every connectivity resource from settings.

    Raises ConfigurationError (or DuplicateLocationError) before any
    resource is derived when the settings are invalid.
    """
    cfg = normalize_settings(settings, defaults)
    hubs_by_location = partition_by_location(
        settings.hub_networks, cfg.default_location
    )
    for location, hub in hubs_by_location.items():
        if not deploy_hub_network(cfg.enabled, hub):
            logger.info("Hub network at %s is not managed by this module", location)

    groups = resolve_resource_groups(cfg, hubs_by_location)

    ddos_plan = provision_ddos_protection_plan(cfg=cfg, groups=groups)
    ddos_plan_id = ddos_protection_plan_id(cfg, ddos_plan)

    vnets, subnets, nsg_associations, route_table_associations = provision_network(
        cfg=cfg,
        hubs_by_location=hubs_by_location,
        groups=groups,
        ddos_plan_id=ddos_plan_id,
    )
    vnet_ids = {vnet.location: vnet.resource_id for vnet in vnets}

    gateways, gateway_public_ips = provision_gateways(
        cfg=cfg, hubs_by_location=hubs_by_location, groups=groups, vnet_ids=vnet_ids
    )
    firewalls, firewall_policies, firewall_public_ips = provision_firewalls(
        cfg=cfg, hubs_by_location=hubs_by_location, groups=groups, vnet_ids=vnet_ids
    )

    public_zones, private_zones = provision_dns_zones(cfg=cfg, groups=groups)
    zone_links = provision_zone_links(
        cfg=cfg, private_zones=private_zones, hub_vnet_ids=list(vnet_ids.values())
    )
    peerings = provision_peerings(
        cfg=cfg, hubs_by_location=hubs_by_location, groups=groups, vnets=vnets
    )

    dns_rg = get_resource_group(groups, "dns", cfg.dns_location)
    result = ConnectivityOutputs(
        azurerm_resource_group=outputs.resource_group_records(groups.values(), SCOPES),
        azurerm_virtual_network=outputs.to_records(
            vnets, outputs.VIRTUAL_NETWORK_FIELDS
        ),
        azurerm_subnet=outputs.to_records(subnets, outputs.SUBNET_FIELDS),
        azurerm_subnet_network_security_group_association=outputs.to_records(
            nsg_associations, outputs.NSG_ASSOCIATION_FIELDS
        ),
        azurerm_subnet_route_table_association=outputs.to_records(
            route_table_associations, outputs.ROUTE_TABLE_ASSOCIATION_FIELDS
        ),
        azurerm_virtual_network_gateway=outputs.to_records(
            gateways, outputs.GATEWAY_FIELDS
        ),
        azurerm_public_ip=outputs.to_records(
            gateway_public_ips + firewall_public_ips, outputs.PUBLIC_IP_FIELDS
        ),
        azurerm_firewall=outputs.to_records(firewalls, outputs.FIREWALL_FIELDS),
        azurerm_firewall_policy=outputs.to_records(
            firewall_policies, outputs.FIREWALL_POLICY_FIELDS
        ),
        azurerm_network_ddos_protection_plan=outputs.to_records(
            [ddos_plan], outputs.DDOS_PROTECTION_PLAN_FIELDS
        ),
        azurerm_dns_zone=outputs.to_records(public_zones, outputs.DNS_ZONE_FIELDS),
        azurerm_private_dns_zone=outputs.to_records(
            private_zones, outputs.DNS_ZONE_FIELDS
        ),
        azurerm_private_dns_zone_virtual_network_link=outputs.to_records(
            zone_links, outputs.ZONE_LINK_FIELDS
        ),
        azurerm_virtual_network_peering=outputs.to_records(
            peerings, outputs.PEERING_FIELDS
        ),
        archetype_config_overrides=outputs.archetype_config_overrides(
            root_id=cfg.root_id,
            ddos_plan_id=ddos_plan_id,
            ddos_enforced=ddos_plan.managed_by_module
            or bool(cfg.existing_ddos_protection_plan_resource_id),
            private_dns_zone_ids=private_dns_zone_ids_by_service(cfg, private_zones),
            dns_enforced=deploy_dns(cfg.enabled, settings.dns),
        ),
        template_file_variables=outputs.template_file_variables(dns_rg.resource_id),
    )
    for family, records in resource_families(result).items():
        logger.debug("%s: %d records", family, len(records))
    return result


def resource_families(result: ConnectivityOutputs) -> Dict[str, Any]:
    """Resource collections keyed by provider resource type.

    Resource groups are flattened across scopes.
    """
    families: Dict[str, Any] = {}
    for f in fields(result):
        if not f.name.startswith("azurerm_"):
            continue
        value = getattr(result, f.name)
        if isinstance(value, dict):
            value = tuple(r for records in value.values() for r in records)
        families[f.name] = value
    return families


def outputs_json(result: ConnectivityOutputs) -> Dict[str, Any]:
    """Plain dict of the assembled outputs, ready for json.dumps."""
    return asdict(result)


def synth_config_json(
    settings: ConnectivitySettings, defaults: GlobalDefaults
) -> Dict[str, Any]:
    """Convert the input dataclasses to plain dicts for diagnostics or outputs."""
    return {"defaults": asdict(defaults), "settings": asdict(settings)}
