"""
Output module.

Projects derived resources into the records the deployment engine consumes:
(resource_id, resource_name, template, managed_by_module). Each family keeps
only the arguments its provider resource accepts; an unmanaged resource gets
an empty template.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from iac_types import OutputRecord, Resource, ResourceGroupConfig

RESOURCE_GROUP_FIELDS = ("name", "location", "tags")
VIRTUAL_NETWORK_FIELDS = (
    "name",
    "resource_group_name",
    "location",
    "address_space",
    "bgp_community",
    "dns_servers",
    "ddos_protection_plan",
    "tags",
)
SUBNET_FIELDS = (
    "name",
    "resource_group_name",
    "virtual_network_name",
    "address_prefixes",
)
NSG_ASSOCIATION_FIELDS = ("subnet_id", "network_security_group_id")
ROUTE_TABLE_ASSOCIATION_FIELDS = ("subnet_id", "route_table_id")
GATEWAY_FIELDS = (
    "name",
    "resource_group_name",
    "location",
    "type",
    "vpn_type",
    "sku",
    "enable_bgp",
    "active_active",
    "ip_configuration",
    "tags",
)
PUBLIC_IP_FIELDS = (
    "name",
    "resource_group_name",
    "location",
    "sku",
    "allocation_method",
    "zones",
    "tags",
)
FIREWALL_FIELDS = (
    "name",
    "resource_group_name",
    "location",
    "sku_name",
    "sku_tier",
    "firewall_policy_id",
    "zones",
    "ip_configuration",
    "tags",
)
FIREWALL_POLICY_FIELDS = (
    "name",
    "resource_group_name",
    "location",
    "sku",
    "base_policy_id",
    "threat_intelligence_mode",
    "threat_intelligence_allowlist",
    "private_ip_ranges",
    "dns",
    "tags",
)
DDOS_PROTECTION_PLAN_FIELDS = ("name", "resource_group_name", "location", "tags")
DNS_ZONE_FIELDS = ("name", "resource_group_name", "tags")
ZONE_LINK_FIELDS = (
    "name",
    "resource_group_name",
    "private_dns_zone_name",
    "virtual_network_id",
    "registration_enabled",
    "tags",
)
PEERING_FIELDS = (
    "name",
    "resource_group_name",
    "virtual_network_name",
    "remote_virtual_network_id",
    "allow_virtual_network_access",
    "allow_forwarded_traffic",
    "allow_gateway_transit",
    "use_remote_gateways",
)


def _project(
    template: Dict[str, Any], fields: Tuple[str, ...], managed: bool
) -> Dict[str, Any]:
    if not managed:
        return {}
    return {key: template[key] for key in fields if key in template}


def to_records(
    resources: Iterable[Resource], fields: Tuple[str, ...]
) -> Tuple[OutputRecord, ...]:
    return tuple(
        OutputRecord(
            resource_id=r.resource_id,
            resource_name=r.name,
            template=_project(r.template, fields, r.managed_by_module),
            managed_by_module=r.managed_by_module,
        )
        for r in resources
    )


def resource_group_records(
    groups: Iterable[ResourceGroupConfig], scopes: Iterable[str]
) -> Dict[str, Tuple[OutputRecord, ...]]:
    by_scope: Dict[str, Tuple[OutputRecord, ...]] = {scope: () for scope in scopes}
    for rg in groups:
        template = {"name": rg.name, "location": rg.location, "tags": dict(rg.tags)}
        by_scope[rg.scope] = by_scope[rg.scope] + (
            OutputRecord(
                resource_id=rg.resource_id,
                resource_name=rg.name,
                template=_project(
                    template, RESOURCE_GROUP_FIELDS, rg.managed_by_module
                ),
                managed_by_module=rg.managed_by_module,
            ),
        )
    return by_scope


def archetype_config_overrides(
    *,
    root_id: str,
    ddos_plan_id: str,
    ddos_enforced: bool,
    private_dns_zone_ids: Dict[str, str],
    dns_enforced: bool,
) -> Dict[str, Any]:
    """Policy parameter overrides for the connectivity and landing zone groups."""
    ddos_parameters = {"ddosPlan": ddos_plan_id}
    return {
        f"{root_id}-connectivity": {
            "parameters": {"Enable-DDoS-VNET": dict(ddos_parameters)},
            "enforcement_mode": {"Enable-DDoS-VNET": ddos_enforced},
        },
        f"{root_id}-landing-zones": {
            "parameters": {
                "Enable-DDoS-VNET": dict(ddos_parameters),
                "Deploy-Private-DNS-Zones": dict(private_dns_zone_ids),
            },
            "enforcement_mode": {
                "Enable-DDoS-VNET": ddos_enforced,
                "Deploy-Private-DNS-Zones": dns_enforced,
            },
        },
    }


def template_file_variables(dns_resource_group_id: str) -> Dict[str, str]:
    return {
        "private_dns_zone_prefix": (
            f"{dns_resource_group_id}/providers/Microsoft.Network/privateDnsZones/"
        )
    }


def records_as_dicts(records: Iterable[OutputRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "resource_id": r.resource_id,
            "resource_name": r.resource_name,
            "template": r.template,
            "managed_by_module": r.managed_by_module,
        }
        for r in records
    ]
