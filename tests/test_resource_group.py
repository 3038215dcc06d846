import pytest

from iac_types import DdosSettings
from modules.resource_group.resource_group import get_resource_group, resolve_resource_groups
from utils.errors import MissingReferenceError
from utils.settings import normalize_settings, partition_by_location

from conftest import SUBSCRIPTION_ID, make_defaults, make_hub, make_settings


def _groups(settings, defaults):
    cfg = normalize_settings(settings, defaults)
    hubs = partition_by_location(settings.hub_networks, cfg.default_location)
    return resolve_resource_groups(cfg, hubs)


def test_connectivity_name_defaults_to_prefix_scope_location():
    groups = _groups(make_settings(), make_defaults())
    rg = get_resource_group(groups, "connectivity", "eastus")
    assert rg.name == "contoso-connectivity-eastus"
    assert rg.resource_id == (
        f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/contoso-connectivity-eastus"
    )


def test_connectivity_name_with_suffix():
    groups = _groups(make_settings(), make_defaults(resource_suffix="dev"))
    rg = get_resource_group(groups, "connectivity", "eastus")
    assert rg.name == "contoso-connectivity-eastus-dev"


def test_one_connectivity_group_per_hub_and_one_each_for_ddos_and_dns():
    settings = make_settings(
        hub_networks=[make_hub("eastus"), make_hub("westus")],
        ddos_protection_plan=DdosSettings(enabled=True, location="northeurope"),
    )
    groups = _groups(settings, make_defaults())
    assert list(groups) == [
        ("connectivity", "eastus"),
        ("connectivity", "westus"),
        ("ddos", "northeurope"),
        ("dns", "eastus"),
    ]
    assert groups[("ddos", "northeurope")].name == "contoso-ddos-northeurope"


def test_custom_name_overrides_default():
    defaults = make_defaults(
        custom_settings_by_resource_type={
            "azurerm_resource_group": {"dns": {"eastus": {"name": "rg-private-dns"}}}
        }
    )
    groups = _groups(make_settings(), defaults)
    assert get_resource_group(groups, "dns", "eastus").name == "rg-private-dns"
    assert get_resource_group(groups, "connectivity", "eastus").name == (
        "contoso-connectivity-eastus"
    )


def test_disabled_hub_group_is_not_managed():
    settings = make_settings(hub_networks=[make_hub(enabled=False)])
    groups = _groups(settings, make_defaults())
    assert not get_resource_group(groups, "connectivity", "eastus").managed_by_module
    assert get_resource_group(groups, "dns", "eastus").managed_by_module


def test_unknown_location_is_a_reference_error():
    groups = _groups(make_settings(), make_defaults())
    with pytest.raises(MissingReferenceError, match="connectivity/westus"):
        get_resource_group(groups, "connectivity", "westus")
