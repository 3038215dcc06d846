"""
Private Link service -> private DNS zone lookup.

A "{location}" placeholder is expanded once per private link location.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

PRIVATE_LINK_SERVICE_ZONES: Dict[str, Tuple[str, ...]] = {
    "azure_api_management": ("privatelink.azure-api.net",),
    "azure_app_configuration_stores": ("privatelink.azconfig.io",),
    "azure_arc": (
        "privatelink.his.arc.azure.com",
        "privatelink.guestconfiguration.azure.com",
        "privatelink.kubernetesconfiguration.azure.com",
    ),
    "azure_automation_dscandhybridworker": ("privatelink.azure-automation.net",),
    "azure_automation_webhook": ("privatelink.azure-automation.net",),
    "azure_batch_account": ("privatelink.batch.azure.com",),
    "azure_cache_for_redis": ("privatelink.redis.cache.windows.net",),
    "azure_cache_for_redis_enterprise": ("privatelink.redisenterprise.cache.azure.net",),
    "azure_container_registry": ("privatelink.azurecr.io",),
    "azure_cosmos_db_cassandra": ("privatelink.cassandra.cosmos.azure.com",),
    "azure_cosmos_db_gremlin": ("privatelink.gremlin.cosmos.azure.com",),
    "azure_cosmos_db_mongodb": ("privatelink.mongo.cosmos.azure.com",),
    "azure_cosmos_db_sql": ("privatelink.documents.azure.com",),
    "azure_cosmos_db_table": ("privatelink.table.cosmos.azure.com",),
    "azure_data_explorer": ("privatelink.{location}.kusto.windows.net",),
    "azure_data_factory": ("privatelink.datafactory.azure.net",),
    "azure_data_factory_portal": ("privatelink.adf.azure.com",),
    "azure_data_health_data_services": (
        "privatelink.workspace.azurehealthcareapis.com",
        "privatelink.fhir.azurehealthcareapis.com",
        "privatelink.dicom.azurehealthcareapis.com",
    ),
    "azure_data_lake_file_system_gen2": ("privatelink.dfs.core.windows.net",),
    "azure_database_for_mariadb_server": ("privatelink.mariadb.database.azure.com",),
    "azure_database_for_mysql_server": ("privatelink.mysql.database.azure.com",),
    "azure_database_for_postgresql_server": ("privatelink.postgres.database.azure.com",),
    "azure_digital_twins": ("privatelink.digitaltwins.azure.net",),
    "azure_event_grid_domain": ("privatelink.eventgrid.azure.net",),
    "azure_event_grid_topic": ("privatelink.eventgrid.azure.net",),
    "azure_event_hubs_namespace": ("privatelink.servicebus.windows.net",),
    "azure_file_sync": ("privatelink.afs.azure.net",),
    "azure_hdinsights": ("privatelink.azurehdinsight.net",),
    "azure_iot_dps": ("privatelink.azure-devices-provisioning.net",),
    "azure_iot_hub": (
        "privatelink.azure-devices.net",
        "privatelink.servicebus.windows.net",
    ),
    "azure_key_vault": ("privatelink.vaultcore.azure.net",),
    "azure_key_vault_managed_hsm": ("privatelink.managedhsm.azure.net",),
    "azure_kubernetes_service_management": ("privatelink.{location}.azmk8s.io",),
    "azure_machine_learning_workspace": (
        "privatelink.api.azureml.ms",
        "privatelink.notebooks.azure.net",
    ),
    "azure_managed_disks": ("privatelink.blob.core.windows.net",),
    "azure_media_services": ("privatelink.media.azure.net",),
    "azure_migrate": ("privatelink.prod.migration.windowsazure.com",),
    "azure_monitor": (
        "privatelink.monitor.azure.com",
        "privatelink.oms.opinsights.azure.com",
        "privatelink.ods.opinsights.azure.com",
        "privatelink.agentsvc.azure-automation.net",
        "privatelink.blob.core.windows.net",
    ),
    "azure_purview_account": ("privatelink.purview.azure.com",),
    "azure_purview_studio": ("privatelink.purviewstudio.azure.com",),
    "azure_relay_namespace": ("privatelink.servicebus.windows.net",),
    "azure_search_service": ("privatelink.search.windows.net",),
    "azure_service_bus_namespace": ("privatelink.servicebus.windows.net",),
    "azure_site_recovery": ("privatelink.siterecovery.windowsazure.com",),
    "azure_sql_database_sqlserver": ("privatelink.database.windows.net",),
    "azure_synapse_analytics_dev": ("privatelink.dev.azuresynapse.net",),
    "azure_synapse_analytics_sql": ("privatelink.sql.azuresynapse.net",),
    "azure_synapse_studio": ("privatelink.azuresynapse.net",),
    "azure_web_apps_sites": ("privatelink.azurewebsites.net",),
    "azure_web_apps_static_sites": ("privatelink.azurestaticapps.net",),
    "cognitive_services_account": ("privatelink.cognitiveservices.azure.com",),
    "microsoft_power_bi": (
        "privatelink.analysis.windows.net",
        "privatelink.pbidedicated.windows.net",
        "privatelink.tip1.powerquery.microsoft.com",
    ),
    "signalr": ("privatelink.service.signalr.net",),
    "signalr_webpubsub": ("privatelink.webpubsub.azure.com",),
    "storage_account_blob": ("privatelink.blob.core.windows.net",),
    "storage_account_file": ("privatelink.file.core.windows.net",),
    "storage_account_queue": ("privatelink.queue.core.windows.net",),
    "storage_account_table": ("privatelink.table.core.windows.net",),
    "storage_account_web": ("privatelink.web.core.windows.net",),
}


def _invert(table: Dict[str, Tuple[str, ...]]) -> Dict[str, Tuple[str, ...]]:
    inverse: Dict[str, List[str]] = {}
    for service, zones in table.items():
        for zone in zones:
            inverse.setdefault(zone, []).append(service)
    return {zone: tuple(services) for zone, services in inverse.items()}


# zone (possibly templated) -> services that need it, in table order
PRIVATE_DNS_ZONE_SERVICES: Dict[str, Tuple[str, ...]] = _invert(
    PRIVATE_LINK_SERVICE_ZONES
)


def expand_zone(zone: str, locations: List[str]) -> List[str]:
    if "{location}" not in zone:
        return [zone]
    return [zone.replace("{location}", location) for location in locations]
