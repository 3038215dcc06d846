from iac_types import Resource, ResourceGroupConfig
from modules.outputs.outputs import (
    SUBNET_FIELDS,
    archetype_config_overrides,
    records_as_dicts,
    resource_group_records,
    template_file_variables,
    to_records,
)


def _subnet(managed: bool) -> Resource:
    return Resource(
        resource_id="/vnet/subnets/snet",
        name="snet",
        managed_by_module=managed,
        scope="connectivity",
        location="eastus",
        template={
            "name": "snet",
            "resource_group_name": "rg",
            "virtual_network_name": "vnet",
            "address_prefixes": ["10.0.0.0/24"],
            "location": "eastus",
            "network_security_group_id": "/nsg",
            "route_table_id": "/rt",
        },
    )


def test_subnet_projection_strips_logic_only_fields():
    (record,) = to_records([_subnet(True)], SUBNET_FIELDS)
    assert record.resource_id == "/vnet/subnets/snet"
    assert record.resource_name == "snet"
    assert record.managed_by_module is True
    assert record.template == {
        "name": "snet",
        "resource_group_name": "rg",
        "virtual_network_name": "vnet",
        "address_prefixes": ["10.0.0.0/24"],
    }


def test_unmanaged_resource_gets_empty_template():
    (record,) = to_records([_subnet(False)], SUBNET_FIELDS)
    assert record.template == {}
    assert record.managed_by_module is False
    assert record.resource_id == "/vnet/subnets/snet"


def test_resource_groups_grouped_by_scope():
    groups = [
        ResourceGroupConfig("dns", "eastus", "rg-dns", "/subscriptions/s/resourceGroups/rg-dns", {}, True),
        ResourceGroupConfig("connectivity", "eastus", "rg-c", "/subscriptions/s/resourceGroups/rg-c", {"a": "b"}, True),
    ]
    by_scope = resource_group_records(groups, ("connectivity", "ddos", "dns"))
    assert list(by_scope) == ["connectivity", "ddos", "dns"]
    assert by_scope["ddos"] == ()
    assert by_scope["connectivity"][0].template == {
        "name": "rg-c",
        "location": "eastus",
        "tags": {"a": "b"},
    }


def test_archetype_config_overrides_shape():
    overrides = archetype_config_overrides(
        root_id="myorg",
        ddos_plan_id="/plan",
        ddos_enforced=False,
        private_dns_zone_ids={"azure_key_vault": "/zone"},
        dns_enforced=True,
    )
    assert list(overrides) == ["myorg-connectivity", "myorg-landing-zones"]
    landing_zones = overrides["myorg-landing-zones"]
    assert landing_zones["parameters"]["Enable-DDoS-VNET"] == {"ddosPlan": "/plan"}
    assert landing_zones["parameters"]["Deploy-Private-DNS-Zones"] == {
        "azure_key_vault": "/zone"
    }
    assert landing_zones["enforcement_mode"] == {
        "Enable-DDoS-VNET": False,
        "Deploy-Private-DNS-Zones": True,
    }


def test_template_file_variables():
    assert template_file_variables("/subscriptions/s/resourceGroups/dns") == {
        "private_dns_zone_prefix": (
            "/subscriptions/s/resourceGroups/dns/providers/Microsoft.Network/privateDnsZones/"
        )
    }


def test_records_as_dicts():
    records = to_records([_subnet(False)], SUBNET_FIELDS)
    assert records_as_dicts(records) == [
        {
            "resource_id": "/vnet/subnets/snet",
            "resource_name": "snet",
            "template": {},
            "managed_by_module": False,
        }
    ]
