from iac_types import FirewallSettings
from modules.firewall.firewall import availability_zones, provision_firewalls
from modules.resource_group.resource_group import resolve_resource_groups
from utils.settings import normalize_settings, partition_by_location

from conftest import make_defaults, make_hub, make_settings

VNET_ID = "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Network/virtualNetworks/v"


def _firewalls(hub):
    settings = make_settings(hub_networks=[hub])
    cfg = normalize_settings(settings, make_defaults())
    by_location = partition_by_location(settings.hub_networks, cfg.default_location)
    groups = resolve_resource_groups(cfg, by_location)
    return provision_firewalls(
        cfg=cfg,
        hubs_by_location=by_location,
        groups=groups,
        vnet_ids={"eastus": VNET_ID},
    )


def test_zones_from_flags():
    assert availability_zones(FirewallSettings()) == ["1", "2", "3"]
    assert availability_zones(
        FirewallSettings(availability_zone_1=False, availability_zone_3=False)
    ) == ["2"]
    assert availability_zones(
        FirewallSettings(
            availability_zone_1=False,
            availability_zone_2=False,
            availability_zone_3=False,
        )
    ) == []


def test_firewall_references_policy_subnet_and_public_ip():
    firewalls, policies, public_ips = _firewalls(make_hub())
    firewall, policy, public_ip = firewalls[0], policies[0], public_ips[0]
    assert firewall.name == "contoso-fw-eastus"
    assert policy.name == "contoso-fw-policy-eastus"
    assert public_ip.name == "contoso-fw-eastus-pip"
    assert firewall.template["firewall_policy_id"] == policy.resource_id
    ip_config = firewall.template["ip_configuration"][0]
    assert ip_config["subnet_id"] == f"{VNET_ID}/subnets/AzureFirewallSubnet"
    assert ip_config["public_ip_address_id"] == public_ip.resource_id
    assert firewall.resource_id.endswith("/azureFirewalls/contoso-fw-eastus")


def test_public_ip_zones_follow_firewall_zones():
    hub = make_hub(
        azure_firewall=FirewallSettings(
            enabled=True, address_prefix="10.0.1.0/24", availability_zone_2=False
        )
    )
    firewalls, _, public_ips = _firewalls(hub)
    assert firewalls[0].template["zones"] == ["1", "3"]
    assert public_ips[0].template["zones"] == ["1", "3"]
    assert public_ips[0].template["allocation_method"] == "Static"


def test_disabled_firewall_is_computed_but_unmanaged():
    hub = make_hub(azure_firewall=FirewallSettings(enabled=False))
    firewalls, policies, public_ips = _firewalls(hub)
    assert not firewalls[0].managed_by_module
    assert not policies[0].managed_by_module
    assert not public_ips[0].managed_by_module
    assert firewalls[0].resource_id


def test_policy_template():
    hub = make_hub(
        azure_firewall=FirewallSettings(
            enabled=True,
            base_policy_id="/base",
            dns_servers=["10.0.0.4"],
            threat_intelligence_mode="Deny",
        )
    )
    _, policies, _ = _firewalls(hub)
    template = policies[0].template
    assert template["base_policy_id"] == "/base"
    assert template["threat_intelligence_mode"] == "Deny"
    assert template["dns"] == {"proxy_enabled": True, "servers": ["10.0.0.4"]}
