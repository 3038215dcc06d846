"""
CDKTF entrypoint for the hub-and-spoke connectivity configuration.

Derives every connectivity resource from the settings file and publishes
the records as Terraform outputs for the deployment engine to apply.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from constructs import Construct
from cdktf import App, TerraformOutput, TerraformStack

from cdktf_cdktf_provider_azurerm.provider import AzurermProvider

from iac_types import ConnectivityOutputs, ConnectivitySettings, GlobalDefaults
from modules.outputs.outputs import records_as_dicts
from stacks.connectivity_stack import (
    build_connectivity,
    resource_families,
    synth_config_json,
)
from utils.config_loader import load_settings_file, settings_file_path
from utils.naming import ZERO_SUBSCRIPTION_ID
from utils.validation import format_configuration_error_message


class ConnectivityStack(TerraformStack):
    """TerraformStack that publishes the derived connectivity resources."""

    def __init__(
        self,
        scope: Construct,
        id: str,
        defaults: GlobalDefaults,
        settings: ConnectivitySettings,
    ) -> None:
        super().__init__(scope, id)

        result: ConnectivityOutputs = build_connectivity(settings, defaults)

        # Provider
        AzurermProvider(
            self,
            "azurerm",
            features=[{}],
            subscription_id=defaults.subscription_id or ZERO_SUBSCRIPTION_ID,
        )

        for family, records in resource_families(result).items():
            TerraformOutput(
                self, family, value=json.dumps(records_as_dicts(records))
            )
        TerraformOutput(
            self,
            "archetype_config_overrides",
            value=json.dumps(result.archetype_config_overrides),
        )
        TerraformOutput(
            self,
            "template_file_variables",
            value=json.dumps(result.template_file_variables),
        )
        # Surface a copy of the config used for traceability
        TerraformOutput(
            self,
            "config_json",
            value=json.dumps(synth_config_json(settings, defaults)),
        )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    repo_root = Path(__file__).resolve().parents[1]

    try:
        defaults, settings = load_settings_file(repo_root=repo_root)
    except FileNotFoundError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        sys.exit(2)
    except ValueError as ex:
        msg = format_configuration_error_message(
            ex, str(settings_file_path(repo_root=repo_root))
        )
        print(msg, file=sys.stderr)
        sys.exit(2)

    app = App()
    try:
        ConnectivityStack(app, "connectivity", defaults, settings)
    except (ValueError, KeyError) as ex:
        # Surface a concise, friendly message instead of a long traceback
        print(f"Error: {ex}", file=sys.stderr)
        sys.exit(1)

    try:
        app.synth()
    except Exception as ex:  # noqa: BLE001 - present actionable error
        print("Synthesis failed.", file=sys.stderr)
        print(str(ex), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
