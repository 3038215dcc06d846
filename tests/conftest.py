from __future__ import annotations

from dataclasses import replace

import pytest

from iac_types import (
    ConnectivitySettings,
    DdosSettings,
    DnsSettings,
    FirewallSettings,
    GatewaySettings,
    GlobalDefaults,
    HubNetworkSettings,
    SubnetSettings,
)
from modules.resource_group.resource_group import resolve_resource_groups
from utils.settings import normalize_settings, partition_by_location

SUBSCRIPTION_ID = "11111111-2222-3333-4444-555555555555"
SPOKE_ID = (
    "/subscriptions/99999999-9999-9999-9999-999999999999/resourceGroups/"
    "spoke-rg/providers/Microsoft.Network/virtualNetworks/spoke-vnet"
)


def make_hub(location: str = "eastus", **overrides) -> HubNetworkSettings:
    hub = HubNetworkSettings(
        enabled=True,
        location=location,
        address_space=["10.100.0.0/16"],
        subnets=[SubnetSettings(name="snet-shared", address_prefixes=["10.100.10.0/24"])],
        virtual_network_gateway=GatewaySettings(
            enabled=True,
            address_prefix="10.100.1.0/24",
            gateway_sku_expressroute="ErGw1AZ",
            gateway_sku_vpn="VpnGw1",
        ),
        azure_firewall=FirewallSettings(enabled=True, address_prefix="10.100.0.0/24"),
    )
    return replace(hub, **overrides)


def make_defaults(**overrides) -> GlobalDefaults:
    defaults = GlobalDefaults(
        root_id="myorg",
        location="eastus",
        subscription_id=SUBSCRIPTION_ID,
        resource_prefix="contoso",
    )
    return replace(defaults, **overrides)


def make_settings(**overrides) -> ConnectivitySettings:
    settings = ConnectivitySettings(
        hub_networks=[make_hub()],
        ddos_protection_plan=DdosSettings(enabled=True),
        dns=DnsSettings(enabled=True),
    )
    return replace(settings, **overrides)


@pytest.fixture
def defaults() -> GlobalDefaults:
    return make_defaults()


@pytest.fixture
def settings() -> ConnectivitySettings:
    return make_settings()


@pytest.fixture
def derived(settings, defaults):
    """(cfg, hubs_by_location, groups) for the default settings."""
    cfg = normalize_settings(settings, defaults)
    hubs = partition_by_location(settings.hub_networks, cfg.default_location)
    return cfg, hubs, resolve_resource_groups(cfg, hubs)
