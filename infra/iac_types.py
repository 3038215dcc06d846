from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SubnetSettings:
    name: str
    address_prefixes: List[str]
    network_security_group_id: str = ""
    route_table_id: str = ""


@dataclass(frozen=True)
class GatewaySettings:
    enabled: bool = False
    address_prefix: str = ""
    gateway_sku_expressroute: str = ""  # e.g. ErGw1AZ
    gateway_sku_vpn: str = ""  # e.g. VpnGw1AZ
    vpn_type: str = "RouteBased"  # RouteBased or PolicyBased
    enable_bgp: bool = False
    active_active: bool = False


@dataclass(frozen=True)
class FirewallSettings:
    enabled: bool = False
    address_prefix: str = ""
    sku_tier: str = "Standard"  # Standard or Premium
    enable_dns_proxy: bool = True
    dns_servers: List[str] = field(default_factory=list)
    base_policy_id: str = ""
    private_ip_ranges: List[str] = field(default_factory=list)
    threat_intelligence_mode: str = "Alert"  # Off, Alert or Deny
    threat_intelligence_allowlist: List[str] = field(default_factory=list)
    availability_zone_1: bool = True
    availability_zone_2: bool = True
    availability_zone_3: bool = True


@dataclass(frozen=True)
class HubNetworkSettings:
    enabled: bool = True
    location: str = ""
    address_space: List[str] = field(default_factory=lambda: ["10.100.0.0/16"])
    dns_servers: List[str] = field(default_factory=list)
    bgp_community: str = ""
    link_to_ddos_protection_plan: bool = False
    subnets: List[SubnetSettings] = field(default_factory=list)
    virtual_network_gateway: GatewaySettings = field(default_factory=GatewaySettings)
    azure_firewall: FirewallSettings = field(default_factory=FirewallSettings)
    spoke_virtual_network_resource_ids: List[str] = field(default_factory=list)
    enable_outbound_virtual_network_peering: bool = False


@dataclass(frozen=True)
class DdosSettings:
    enabled: bool = False
    location: str = ""


@dataclass(frozen=True)
class DnsSettings:
    enabled: bool = True
    location: str = ""
    enable_private_link_by_service: Dict[str, bool] = field(default_factory=dict)
    private_link_locations: List[str] = field(default_factory=list)
    public_dns_zones: List[str] = field(default_factory=list)
    private_dns_zones: List[str] = field(default_factory=list)
    enable_private_dns_zone_virtual_network_link_on_hubs: bool = True
    enable_private_dns_zone_virtual_network_link_on_spokes: bool = True
    virtual_network_resource_ids_to_link: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ConnectivitySettings:
    hub_networks: List[HubNetworkSettings] = field(default_factory=list)
    ddos_protection_plan: DdosSettings = field(default_factory=DdosSettings)
    dns: DnsSettings = field(default_factory=DnsSettings)


@dataclass(frozen=True)
class GlobalDefaults:
    root_id: str
    location: str
    enabled: bool = True
    subscription_id: str = ""
    tags: Dict[str, str] = field(default_factory=dict)
    resource_prefix: str = ""
    resource_suffix: str = ""
    existing_ddos_protection_plan_resource_id: str = ""
    # resource type -> scope -> location -> {"name": ..., "tags": {...}}
    custom_settings_by_resource_type: Dict[str, Dict[str, Any]] = field(
        default_factory=dict
    )


@dataclass(frozen=True)
class NormalizedSettings:
    enabled: bool
    root_id: str
    subscription_id: str
    default_location: str
    resource_prefix: str
    resource_suffix: str  # already carries the leading "-" when set
    tags: Dict[str, str]
    ddos_location: str
    dns_location: str
    private_link_locations: List[str]
    existing_ddos_protection_plan_resource_id: str
    custom_settings_by_resource_type: Dict[str, Dict[str, Any]]
    settings: ConnectivitySettings


@dataclass(frozen=True)
class ResourceGroupConfig:
    scope: str  # connectivity, ddos or dns
    location: str
    name: str
    resource_id: str
    tags: Dict[str, str]
    managed_by_module: bool


@dataclass(frozen=True)
class Resource:
    """A derived resource; the template is the provider argument map."""

    resource_id: str
    name: str
    managed_by_module: bool
    scope: str
    location: str
    template: Dict[str, Any]
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class OutputRecord:
    resource_id: str
    resource_name: str
    template: Dict[str, Any]
    managed_by_module: bool


@dataclass(frozen=True)
class ConnectivityOutputs:
    azurerm_resource_group: Dict[str, Tuple[OutputRecord, ...]]
    azurerm_virtual_network: Tuple[OutputRecord, ...]
    azurerm_subnet: Tuple[OutputRecord, ...]
    azurerm_subnet_network_security_group_association: Tuple[OutputRecord, ...]
    azurerm_subnet_route_table_association: Tuple[OutputRecord, ...]
    azurerm_virtual_network_gateway: Tuple[OutputRecord, ...]
    azurerm_public_ip: Tuple[OutputRecord, ...]
    azurerm_firewall: Tuple[OutputRecord, ...]
    azurerm_firewall_policy: Tuple[OutputRecord, ...]
    azurerm_network_ddos_protection_plan: Tuple[OutputRecord, ...]
    azurerm_dns_zone: Tuple[OutputRecord, ...]
    azurerm_private_dns_zone: Tuple[OutputRecord, ...]
    azurerm_private_dns_zone_virtual_network_link: Tuple[OutputRecord, ...]
    azurerm_virtual_network_peering: Tuple[OutputRecord, ...]
    archetype_config_overrides: Dict[str, Any]
    template_file_variables: Dict[str, str]
