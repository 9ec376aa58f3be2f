# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from dataclasses import dataclass, fields
from os import environ
from re import fullmatch
from typing import Final, Self

# project
from anf_sample.config.env import (
    ACCOUNT_NAME_SETTING,
    AD_FQDN_SETTING,
    CAPACITY_POOL_NAME_SETTING,
    CAPACITY_POOL_SERVICE_LEVEL_SETTING,
    CAPACITY_POOL_SIZE_SETTING,
    CLEANUP_SETTING,
    DNS_LIST_SETTING,
    DOMAIN_JOIN_USERNAME_SETTING,
    LOCATION_SETTING,
    RESOURCE_GROUP_SETTING,
    SMB_SERVER_NAME_PREFIX_SETTING,
    SUBNET_NAME_SETTING,
    SUBSCRIPTION_ID_SETTING,
    VNET_NAME_SETTING,
    VOLUME_NAME_SETTING,
    VOLUME_SIZE_SETTING,
    is_truthy,
    parse_config_option,
)
from anf_sample.tasks.common import (
    MIN_CAPACITY_POOL_SIZE,
    MIN_VOLUME_SIZE,
    SMB_SERVER_NAME_PREFIX_MAX_LENGTH,
    VALID_SERVICE_LEVELS,
    get_subnet_id,
)

# ===== Placeholders, change these to values related to your environment ===== #
SUBSCRIPTION_ID: Final = "<subscription-id>"
LOCATION: Final = "<location>"
RESOURCE_GROUP_NAME: Final = "<resource-group-name>"
VNET_NAME: Final = "<vnet-name>"
SUBNET_NAME: Final = "<subnet-name>"
ANF_ACCOUNT_NAME: Final = "anf-python-example-account"
CAPACITY_POOL_NAME: Final = "anf-python-example-pool"
CAPACITY_POOL_SERVICE_LEVEL: Final = "Standard"  # Ultra, Premium or Standard
CAPACITY_POOL_SIZE: Final = MIN_CAPACITY_POOL_SIZE
VOLUME_NAME: Final = "anf-python-example-volume"
VOLUME_SIZE: Final = MIN_VOLUME_SIZE

# SMB/CIFS
DOMAIN_JOIN_USERNAME: Final = "testadmin"
DNS_LIST: Final = "10.0.2.4,10.0.2.5"  # comma-separated
AD_FQDN: Final = "testdomain.local"
# a random string gets appended during the domain join
SMB_SERVER_NAME_PREFIX: Final = "testsmb"


class InvalidSettingsError(Exception):
    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid sample settings:\n  " + "\n  ".join(problems))


def is_placeholder(value: str) -> bool:
    return fullmatch(r"<[^<>]+>", value.strip()) is not None


def parse_size(value: str) -> int | None:
    size = int(value)
    return size if size > 0 else None


@dataclass(frozen=True)
class SampleSettings:
    subscription_id: str
    location: str
    resource_group: str
    vnet_name: str
    subnet_name: str
    account_name: str
    capacity_pool_name: str
    service_level: str
    capacity_pool_size: int
    volume_name: str
    volume_size: int
    domain_join_username: str
    dns_list: str
    ad_fqdn: str
    smb_server_name_prefix: str
    cleanup: bool = False

    @classmethod
    def from_environment(cls) -> Self:
        """Start from the placeholders above, overridden by any environment variables which are set"""
        return cls(
            subscription_id=environ.get(SUBSCRIPTION_ID_SETTING, SUBSCRIPTION_ID),
            location=environ.get(LOCATION_SETTING, LOCATION),
            resource_group=environ.get(RESOURCE_GROUP_SETTING, RESOURCE_GROUP_NAME),
            vnet_name=environ.get(VNET_NAME_SETTING, VNET_NAME),
            subnet_name=environ.get(SUBNET_NAME_SETTING, SUBNET_NAME),
            account_name=environ.get(ACCOUNT_NAME_SETTING, ANF_ACCOUNT_NAME),
            capacity_pool_name=environ.get(CAPACITY_POOL_NAME_SETTING, CAPACITY_POOL_NAME),
            service_level=environ.get(CAPACITY_POOL_SERVICE_LEVEL_SETTING, CAPACITY_POOL_SERVICE_LEVEL),
            capacity_pool_size=parse_config_option(CAPACITY_POOL_SIZE_SETTING, parse_size, CAPACITY_POOL_SIZE),
            volume_name=environ.get(VOLUME_NAME_SETTING, VOLUME_NAME),
            volume_size=parse_config_option(VOLUME_SIZE_SETTING, parse_size, VOLUME_SIZE),
            domain_join_username=environ.get(DOMAIN_JOIN_USERNAME_SETTING, DOMAIN_JOIN_USERNAME),
            dns_list=environ.get(DNS_LIST_SETTING, DNS_LIST),
            ad_fqdn=environ.get(AD_FQDN_SETTING, AD_FQDN),
            smb_server_name_prefix=environ.get(SMB_SERVER_NAME_PREFIX_SETTING, SMB_SERVER_NAME_PREFIX),
            cleanup=is_truthy(CLEANUP_SETTING),
        )

    @property
    def subnet_id(self) -> str:
        return get_subnet_id(self.subscription_id, self.resource_group, self.vnet_name, self.subnet_name)

    def validate(self) -> None:
        """Raise an InvalidSettingsError describing every problem, before anything is sent to Azure"""
        problems: list[str] = []
        for field in fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, str):
                continue
            if not value.strip():
                problems.append(f"'{field.name}' must not be empty")
            elif is_placeholder(value):
                problems.append(f"'{field.name}' is still set to the placeholder {value}")
        if self.service_level not in VALID_SERVICE_LEVELS:
            problems.append(
                f"'service_level' must be one of {', '.join(VALID_SERVICE_LEVELS)}, got {self.service_level!r}"
            )
        if self.capacity_pool_size < MIN_CAPACITY_POOL_SIZE:
            problems.append(f"'capacity_pool_size' must be at least {MIN_CAPACITY_POOL_SIZE} bytes (4TiB)")
        if self.volume_size < MIN_VOLUME_SIZE:
            problems.append(f"'volume_size' must be at least {MIN_VOLUME_SIZE} bytes (100GiB)")
        if len(self.smb_server_name_prefix) > SMB_SERVER_NAME_PREFIX_MAX_LENGTH:
            problems.append(
                f"'smb_server_name_prefix' must be at most {SMB_SERVER_NAME_PREFIX_MAX_LENGTH} characters long"
            )
        if not any(dns.strip() for dns in self.dns_list.split(",")):
            problems.append("'dns_list' must contain at least one DNS server address")
        if problems:
            raise InvalidSettingsError(problems)
