# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from collections.abc import Callable
from logging import getLogger
from os import environ
from typing import TypeVar

T = TypeVar("T")

log = getLogger(__name__)


# Settings
SUBSCRIPTION_ID_SETTING = "AZURE_SUBSCRIPTION_ID"
LOCATION_SETTING = "ANF_LOCATION"
RESOURCE_GROUP_SETTING = "ANF_RESOURCE_GROUP"
VNET_NAME_SETTING = "ANF_VNET_NAME"
SUBNET_NAME_SETTING = "ANF_SUBNET_NAME"
ACCOUNT_NAME_SETTING = "ANF_ACCOUNT_NAME"
CAPACITY_POOL_NAME_SETTING = "ANF_CAPACITY_POOL_NAME"
CAPACITY_POOL_SERVICE_LEVEL_SETTING = "ANF_CAPACITY_POOL_SERVICE_LEVEL"
CAPACITY_POOL_SIZE_SETTING = "ANF_CAPACITY_POOL_SIZE"
VOLUME_NAME_SETTING = "ANF_VOLUME_NAME"
VOLUME_SIZE_SETTING = "ANF_VOLUME_SIZE"
DOMAIN_JOIN_USERNAME_SETTING = "ANF_DOMAIN_JOIN_USERNAME"
DNS_LIST_SETTING = "ANF_DNS_LIST"
AD_FQDN_SETTING = "ANF_AD_FQDN"
SMB_SERVER_NAME_PREFIX_SETTING = "ANF_SMB_SERVER_NAME_PREFIX"
CLEANUP_SETTING = "ANF_CLEANUP"
AUTH_LOCATION_SETTING = "AZURE_AUTH_LOCATION"
LOG_LEVEL_SETTING = "LOG_LEVEL"
DD_API_KEY_SETTING = "DD_API_KEY"
DD_TELEMETRY_SETTING = "DD_TELEMETRY"


class MissingConfigOptionError(Exception):
    def __init__(self, option: str) -> None:
        super().__init__(f"Missing required configuration option: {option}")


def get_config_option(name: str) -> str:
    """Get a configuration option from the environment or raise a helpful error"""
    if option := environ.get(name):
        return option
    raise MissingConfigOptionError(name)


def parse_config_option(name: str, parse: Callable[[str], T | None], default: T) -> T:
    """Get a configuration option from the environment, parse it, or return a default"""
    try:
        value = environ.get(name)
        if value is None:
            return default
        result = parse(value)
        if result is None:
            log.error(f"Invalid value for configuration option {name}: {value}")
            return default
        return result
    except ValueError:
        log.error(f"Invalid value for configuration option {name}: {environ.get(name)}")
        return default


def is_truthy(setting_name: str) -> bool:
    return environ.get(setting_name, "").lower().strip() in {"t", "true", "1", "y", "yes"}
