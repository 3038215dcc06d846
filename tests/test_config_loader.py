import json

import pytest

from stacks.connectivity_stack import build_connectivity
from utils.config_loader import (
    DEFAULT_SETTINGS_FILE,
    load_settings_file,
    parse_settings,
    settings_file_path,
)
from utils.errors import ConfigurationError

DOCUMENT = {
    "root_id": "myorg",
    "location": "eastus",
    "resource_prefix": "contoso",
    "tags": {"env": "dev"},
    "settings": {
        "hub_networks": [
            {
                "enabled": True,
                "config": {
                    "address_space": ["10.100.0.0/16"],
                    "location": "westus",
                    "subnets": [
                        {
                            "name": "snet-shared",
                            "address_prefixes": ["10.100.10.0/24"],
                            "network_security_group_id": "/nsg",
                        }
                    ],
                    "virtual_network_gateway": {
                        "enabled": True,
                        "config": {
                            "address_prefix": "10.100.1.0/24",
                            "gateway_sku_expressroute": "ErGw1AZ",
                        },
                    },
                    "azure_firewall": {
                        "enabled": False,
                        "config": {
                            "address_prefix": "",
                            "availability_zones": {"zone_1": True, "zone_2": False},
                        },
                    },
                    "spoke_virtual_network_resource_ids": ["/spoke"],
                },
            }
        ],
        "ddos_protection_plan": {"enabled": True, "config": {"location": ""}},
        "dns": {
            "enabled": True,
            "config": {
                "enable_private_link_by_service": {"azure_key_vault": False},
                "public_dns_zones": ["contoso.com"],
            },
        },
    },
}


def test_parse_full_document():
    defaults, settings = parse_settings(DOCUMENT, env={})
    assert defaults.root_id == "myorg"
    assert defaults.tags == {"env": "dev"}
    assert defaults.enabled is True
    hub = settings.hub_networks[0]
    assert hub.location == "westus"
    assert hub.subnets[0].network_security_group_id == "/nsg"
    assert hub.subnets[0].route_table_id == ""
    assert hub.virtual_network_gateway.gateway_sku_expressroute == "ErGw1AZ"
    assert hub.virtual_network_gateway.gateway_sku_vpn == ""
    assert hub.virtual_network_gateway.vpn_type == "RouteBased"
    assert hub.azure_firewall.enabled is False
    assert hub.azure_firewall.availability_zone_1 is True
    assert hub.azure_firewall.availability_zone_2 is False
    assert hub.azure_firewall.availability_zone_3 is True
    assert hub.spoke_virtual_network_resource_ids == ["/spoke"]
    assert settings.ddos_protection_plan.enabled is True
    assert settings.dns.enable_private_link_by_service == {"azure_key_vault": False}
    assert settings.dns.public_dns_zones == ["contoso.com"]


def test_minimal_document_uses_defaults():
    defaults, settings = parse_settings({"root_id": "myorg", "location": "eastus"}, env={})
    assert settings.hub_networks == []
    assert settings.dns.enabled is True
    assert settings.ddos_protection_plan.enabled is False
    assert defaults.subscription_id == ""


def test_subscription_id_falls_back_to_environment():
    sub = "11111111-2222-3333-4444-555555555555"
    defaults, _ = parse_settings(
        {"root_id": "myorg", "location": "eastus"}, env={"ARM_SUBSCRIPTION_ID": sub}
    )
    assert defaults.subscription_id == sub


def test_missing_required_var():
    with pytest.raises(ConfigurationError, match="root_id"):
        parse_settings({"location": "eastus"}, env={})


def test_wrong_types_are_reported_with_path():
    document = {
        "root_id": "myorg",
        "location": "eastus",
        "settings": {"hub_networks": [{"enabled": "maybe"}]},
    }
    with pytest.raises(ConfigurationError, match=r"settings.hub_networks\[0\].enabled"):
        parse_settings(document, env={})


def test_settings_file_path_defaults(tmp_path):
    assert settings_file_path(repo_root=tmp_path, env={}) == (
        tmp_path / DEFAULT_SETTINGS_FILE
    ).resolve()
    assert settings_file_path(
        repo_root=tmp_path, env={"CONNECTIVITY_SETTINGS_FILE": "  "}
    ) == (tmp_path / DEFAULT_SETTINGS_FILE).resolve()


def test_load_settings_file(tmp_path):
    path = tmp_path / "prod.tfvars.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    defaults, settings = load_settings_file(
        repo_root=tmp_path, env={"CONNECTIVITY_SETTINGS_FILE": "prod.tfvars.json"}
    )
    assert defaults.resource_prefix == "contoso"
    assert len(settings.hub_networks) == 1


def test_load_settings_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings_file(repo_root=tmp_path, env={})


def test_load_settings_file_invalid_json(tmp_path):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_settings_file(repo_root=tmp_path, env={"CONNECTIVITY_SETTINGS_FILE": "bad.json"})


def test_null_custom_settings_sections_are_ignored():
    document = {
        "root_id": "myorg",
        "location": "eastus",
        "custom_settings_by_resource_type": {
            "azurerm_resource_group": None,
            "azurerm_virtual_network": {"connectivity": None},
            "azurerm_firewall": {"connectivity": {"eastus": None}},
        },
        "settings": {"hub_networks": [{"config": {"location": "eastus"}}]},
    }
    defaults, settings = parse_settings(document, env={})
    assert defaults.custom_settings_by_resource_type == {
        "azurerm_resource_group": {},
        "azurerm_virtual_network": {"connectivity": {}},
        "azurerm_firewall": {"connectivity": {"eastus": {}}},
    }
    result = build_connectivity(settings, defaults)
    assert result.azurerm_resource_group["connectivity"][0].resource_name == (
        "myorg-connectivity-eastus"
    )


def test_malformed_custom_settings_report_key_path():
    document = {
        "root_id": "myorg",
        "location": "eastus",
        "custom_settings_by_resource_type": {
            "azurerm_resource_group": {"dns": {"eastus": "rg-dns"}}
        },
    }
    with pytest.raises(
        ConfigurationError,
        match=r"custom_settings_by_resource_type.azurerm_resource_group.dns.eastus",
    ):
        parse_settings(document, env={})
