"""
Preflight validation helpers.

Pure, minimal functions that validate identifiers before derivation and
format actionable error messages for users.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from utils.errors import ConfigurationError

ROOT_ID_PATTERN = re.compile(r"^[a-zA-Z0-9-]{2,10}$")
GUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def validate_root_id(root_id: str) -> str:
    """Return root_id unchanged, or raise if it is not 2-10 alphanumerics/hyphens."""
    if not ROOT_ID_PATTERN.match(root_id or ""):
        raise ConfigurationError(
            f"Invalid root_id '{root_id}': expected 2-10 characters "
            "from [a-zA-Z0-9-]"
        )
    return root_id


def validate_subscription_id(subscription_id: str) -> str:
    # Empty is allowed; the normalizer substitutes the zero GUID.
    if subscription_id and not GUID_PATTERN.match(subscription_id):
        raise ConfigurationError(
            f"Invalid subscription_id '{subscription_id}': expected a GUID"
        )
    return subscription_id


def validate_location(location: str, field_name: str) -> str:
    if not location:
        raise ConfigurationError(f"Missing required setting: {field_name}")
    return location


def format_configuration_error_message(error: Exception, settings_file: str) -> str:
    """Format a friendly, actionable message for a rejected settings file."""
    lines: List[str] = []
    lines.append("Preflight check failed: invalid connectivity settings")
    lines.append("")
    lines.append(f"  {error}")
    lines.append("")
    lines.append(f"Settings file: {settings_file}")
    lines.append("Fix the value above, then re-run: cdktf synth")
    return "\n".join(lines)


def validate_private_link_services(
    services: Iterable[str], known: Iterable[str]
) -> None:
    unknown = sorted(set(services) - set(known))
    if unknown:
        raise ConfigurationError(
            "Unknown enable_private_link_by_service keys: " + ", ".join(unknown)
        )


def validate_subnet_names(
    declared: Iterable[str], reserved: Iterable[str], location: str
) -> None:
    """Reject repeated subnet names, counting reserved subnets the hub adds."""
    seen: List[str] = []
    for name in list(declared) + list(reserved):
        if name in seen:
            raise ConfigurationError(
                f"Duplicate subnet name '{name}' in hub network at '{location}'"
            )
        seen.append(name)
