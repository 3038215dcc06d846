"""
Config loader for connectivity settings -> typed config used by the CDKTF stack.

Functional, pure helpers that read a Terraform-style *.tfvars.json document
(the same shape as the module's input variables) into frozen dataclasses.
Every nested field is optional and falls back to the dataclass default.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

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
from utils.errors import ConfigurationError

DEFAULT_SETTINGS_FILE = "vars/connectivity.tfvars.json"

_MISSING = object()


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "1"):
        return True
    if isinstance(value, str) and value.lower() in ("false", "0"):
        return False
    raise ConfigurationError(f"Invalid boolean value for {key}: {value!r}")


def _to_str(value: Any, key: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid string value for {key}: {value!r}")
    return value


def _to_str_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"Invalid list value for {key}: {value!r}")
    return [_to_str(v, f"{key}[]") for v in value]


def _to_mapping(value: Any, key: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Invalid object value for {key}: {value!r}")
    return value


def _required(vars_map: Mapping[str, Any], key: str) -> Any:
    if key not in vars_map:
        raise ConfigurationError(f"Missing required var: {key}")
    return vars_map[key]


def _optional(vars_map: Mapping[str, Any], key: str, convert, path: str) -> Any:
    value = vars_map.get(key, _MISSING)
    if value is _MISSING:
        return _MISSING
    return convert(value, f"{path}.{key}" if path else key)


def _kwargs(
    vars_map: Mapping[str, Any], converters: Tuple[Tuple[str, Any], ...], path: str
) -> Dict[str, Any]:
    """Convert the keys present in vars_map; absent keys keep dataclass defaults."""
    kwargs: Dict[str, Any] = {}
    for key, convert in converters:
        value = _optional(vars_map, key, convert, path)
        if value is not _MISSING:
            kwargs[key] = value
    return kwargs


def _enabled_config(
    vars_map: Mapping[str, Any], path: str
) -> Tuple[Dict[str, Any], Mapping[str, Any]]:
    """Split the {enabled, config} wrapper used by every settings section."""
    enabled = _optional(vars_map, "enabled", _to_bool, path)
    config = _to_mapping(vars_map.get("config"), f"{path}.config")
    return ({} if enabled is _MISSING else {"enabled": enabled}), config


def _build_custom_settings(
    vars_map: Mapping[str, Any], path: str
) -> Dict[str, Dict[str, Any]]:
    """Validate resource type -> scope -> location -> settings, dropping nulls."""
    custom: Dict[str, Dict[str, Any]] = {}
    for resource_type, by_scope in _to_mapping(vars_map, path).items():
        tpath = f"{path}.{resource_type}"
        custom[str(resource_type)] = {
            str(scope): {
                str(location): dict(
                    _to_mapping(values, f"{tpath}.{scope}.{location}")
                )
                for location, values in _to_mapping(
                    by_location, f"{tpath}.{scope}"
                ).items()
            }
            for scope, by_location in _to_mapping(by_scope, tpath).items()
        }
    return custom


def _build_subnet(vars_map: Mapping[str, Any], path: str) -> SubnetSettings:
    vars_map = _to_mapping(vars_map, path)
    return SubnetSettings(
        name=_to_str(_required(vars_map, "name"), f"{path}.name"),
        address_prefixes=_to_str_list(
            _required(vars_map, "address_prefixes"), f"{path}.address_prefixes"
        ),
        network_security_group_id=_to_str(
            vars_map.get("network_security_group_id"),
            f"{path}.network_security_group_id",
        ),
        route_table_id=_to_str(vars_map.get("route_table_id"), f"{path}.route_table_id"),
    )


def _build_gateway(vars_map: Mapping[str, Any], path: str) -> GatewaySettings:
    kwargs, config = _enabled_config(_to_mapping(vars_map, path), path)
    kwargs.update(
        _kwargs(
            config,
            (
                ("address_prefix", _to_str),
                ("gateway_sku_expressroute", _to_str),
                ("gateway_sku_vpn", _to_str),
                ("vpn_type", _to_str),
                ("enable_bgp", _to_bool),
                ("active_active", _to_bool),
            ),
            f"{path}.config",
        )
    )
    return GatewaySettings(**kwargs)


def _build_firewall(vars_map: Mapping[str, Any], path: str) -> FirewallSettings:
    kwargs, config = _enabled_config(_to_mapping(vars_map, path), path)
    kwargs.update(
        _kwargs(
            config,
            (
                ("address_prefix", _to_str),
                ("sku_tier", _to_str),
                ("enable_dns_proxy", _to_bool),
                ("dns_servers", _to_str_list),
                ("base_policy_id", _to_str),
                ("private_ip_ranges", _to_str_list),
                ("threat_intelligence_mode", _to_str),
                ("threat_intelligence_allowlist", _to_str_list),
            ),
            f"{path}.config",
        )
    )
    zones = _to_mapping(config.get("availability_zones"), f"{path}.config.availability_zones")
    for zone in ("zone_1", "zone_2", "zone_3"):
        if zone in zones:
            kwargs[f"availability_{zone}"] = _to_bool(
                zones[zone], f"{path}.config.availability_zones.{zone}"
            )
    return FirewallSettings(**kwargs)


def _build_hub_network(vars_map: Mapping[str, Any], path: str) -> HubNetworkSettings:
    kwargs, config = _enabled_config(_to_mapping(vars_map, path), path)
    cpath = f"{path}.config"
    kwargs.update(
        _kwargs(
            config,
            (
                ("location", _to_str),
                ("address_space", _to_str_list),
                ("dns_servers", _to_str_list),
                ("bgp_community", _to_str),
                ("link_to_ddos_protection_plan", _to_bool),
                ("spoke_virtual_network_resource_ids", _to_str_list),
                ("enable_outbound_virtual_network_peering", _to_bool),
            ),
            cpath,
        )
    )
    if "subnets" in config:
        subnets = config["subnets"] or []
        if not isinstance(subnets, list):
            raise ConfigurationError(f"Invalid list value for {cpath}.subnets")
        kwargs["subnets"] = [
            _build_subnet(s, f"{cpath}.subnets[{i}]") for i, s in enumerate(subnets)
        ]
    if "virtual_network_gateway" in config:
        kwargs["virtual_network_gateway"] = _build_gateway(
            config["virtual_network_gateway"], f"{cpath}.virtual_network_gateway"
        )
    if "azure_firewall" in config:
        kwargs["azure_firewall"] = _build_firewall(
            config["azure_firewall"], f"{cpath}.azure_firewall"
        )
    return HubNetworkSettings(**kwargs)


def _build_ddos(vars_map: Mapping[str, Any], path: str) -> DdosSettings:
    kwargs, config = _enabled_config(_to_mapping(vars_map, path), path)
    kwargs.update(_kwargs(config, (("location", _to_str),), f"{path}.config"))
    return DdosSettings(**kwargs)


def _build_dns(vars_map: Mapping[str, Any], path: str) -> DnsSettings:
    kwargs, config = _enabled_config(_to_mapping(vars_map, path), path)
    cpath = f"{path}.config"
    kwargs.update(
        _kwargs(
            config,
            (
                ("location", _to_str),
                ("private_link_locations", _to_str_list),
                ("public_dns_zones", _to_str_list),
                ("private_dns_zones", _to_str_list),
                ("enable_private_dns_zone_virtual_network_link_on_hubs", _to_bool),
                ("enable_private_dns_zone_virtual_network_link_on_spokes", _to_bool),
                ("virtual_network_resource_ids_to_link", _to_str_list),
            ),
            cpath,
        )
    )
    by_service = _to_mapping(
        config.get("enable_private_link_by_service"),
        f"{cpath}.enable_private_link_by_service",
    )
    if by_service:
        kwargs["enable_private_link_by_service"] = {
            str(service): _to_bool(
                value, f"{cpath}.enable_private_link_by_service.{service}"
            )
            for service, value in by_service.items()
        }
    return DnsSettings(**kwargs)


def parse_settings(
    document: Mapping[str, Any], env: Mapping[str, str] = os.environ
) -> Tuple[GlobalDefaults, ConnectivitySettings]:
    """Build (defaults, settings) from a parsed tfvars.json document."""
    document = _to_mapping(document, "<root>")
    settings_map = _to_mapping(document.get("settings"), "settings")

    hubs = settings_map.get("hub_networks") or []
    if not isinstance(hubs, list):
        raise ConfigurationError("Invalid list value for settings.hub_networks")
    settings = ConnectivitySettings(
        hub_networks=[
            _build_hub_network(h, f"settings.hub_networks[{i}]")
            for i, h in enumerate(hubs)
        ],
        ddos_protection_plan=_build_ddos(
            settings_map.get("ddos_protection_plan"), "settings.ddos_protection_plan"
        ),
        dns=_build_dns(settings_map.get("dns"), "settings.dns"),
    )

    # Same fallback the azurerm provider uses for the subscription context.
    subscription_id = _to_str(document.get("subscription_id"), "subscription_id")
    if not subscription_id:
        subscription_id = (env.get("ARM_SUBSCRIPTION_ID") or "").strip()

    custom = _build_custom_settings(
        document.get("custom_settings_by_resource_type"),
        "custom_settings_by_resource_type",
    )
    tags = _to_mapping(document.get("tags"), "tags")
    defaults = GlobalDefaults(
        root_id=_to_str(_required(document, "root_id"), "root_id"),
        location=_to_str(_required(document, "location"), "location"),
        enabled=_to_bool(document.get("enabled", True), "enabled"),
        subscription_id=subscription_id,
        tags={str(k): _to_str(v, f"tags.{k}") for k, v in tags.items()},
        resource_prefix=_to_str(document.get("resource_prefix"), "resource_prefix"),
        resource_suffix=_to_str(document.get("resource_suffix"), "resource_suffix"),
        existing_ddos_protection_plan_resource_id=_to_str(
            document.get("existing_ddos_protection_plan_resource_id"),
            "existing_ddos_protection_plan_resource_id",
        ),
        custom_settings_by_resource_type=custom,
    )
    return defaults, settings


def settings_file_path(*, repo_root: Path, env: Mapping[str, str] = os.environ) -> Path:
    # Use default if env var is missing or empty
    settings_file_env = env.get("CONNECTIVITY_SETTINGS_FILE")
    settings_file = (
        settings_file_env
        if (settings_file_env and settings_file_env.strip())
        else DEFAULT_SETTINGS_FILE
    )
    return (repo_root / settings_file).resolve()


def load_settings_file(
    *, repo_root: Path, env: Mapping[str, str] = os.environ
) -> Tuple[GlobalDefaults, ConnectivitySettings]:
    vars_path = settings_file_path(repo_root=repo_root, env=env)
    if not vars_path.exists():
        raise FileNotFoundError(f"settings file not found: {vars_path}")

    content = vars_path.read_text(encoding="utf-8")
    try:
        document = json.loads(content)
    except json.JSONDecodeError as ex:
        raise ConfigurationError(f"Invalid JSON in {vars_path}: {ex}") from ex
    return parse_settings(document, env=env)
