"""
Deployment gates.

Each gate only decides the managed_by_module flag; resources behind a false
gate are still derived so that other resources can reference them.
"""

from __future__ import annotations

from iac_types import DdosSettings, DnsSettings, HubNetworkSettings


def deploy_hub_network(enabled: bool, hub: HubNetworkSettings) -> bool:
    return enabled and hub.enabled


def deploy_virtual_network_gateway(enabled: bool, hub: HubNetworkSettings) -> bool:
    gateway = hub.virtual_network_gateway
    return (
        deploy_hub_network(enabled, hub)
        and gateway.enabled
        and gateway.address_prefix != ""
    )


def deploy_expressroute_gateway(enabled: bool, hub: HubNetworkSettings) -> bool:
    return (
        deploy_virtual_network_gateway(enabled, hub)
        and hub.virtual_network_gateway.gateway_sku_expressroute != ""
    )


def deploy_vpn_gateway(enabled: bool, hub: HubNetworkSettings) -> bool:
    return (
        deploy_virtual_network_gateway(enabled, hub)
        and hub.virtual_network_gateway.gateway_sku_vpn != ""
    )


def deploy_azure_firewall(enabled: bool, hub: HubNetworkSettings) -> bool:
    return deploy_hub_network(enabled, hub) and hub.azure_firewall.enabled


def deploy_ddos_protection_plan(enabled: bool, ddos: DdosSettings) -> bool:
    return enabled and ddos.enabled


def deploy_dns(enabled: bool, dns: DnsSettings) -> bool:
    return enabled and dns.enabled


def deploy_outbound_virtual_network_peering(
    dns_enabled: bool, hub: HubNetworkSettings
) -> bool:
    return dns_enabled and hub.enable_outbound_virtual_network_peering


def deploy_private_dns_zone(dns_enabled: bool, services_enabled: bool) -> bool:
    return dns_enabled and services_enabled


def deploy_zone_link(zone_enabled: bool, link_enabled: bool) -> bool:
    return zone_enabled and link_enabled
