# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from datetime import datetime
from typing import Final, NamedTuple

# 3p
from azure.mgmt.core.tools import parse_resource_id

ANF_METRIC_PREFIX: Final = "azure.anf_sample."

MIN_CAPACITY_POOL_SIZE: Final = 4398046511104  # 4TiB
MIN_VOLUME_SIZE: Final = 107374182400  # 100GiB
VALID_SERVICE_LEVELS: Final = ("Ultra", "Premium", "Standard")
SMB_SERVER_NAME_PREFIX_MAX_LENGTH: Final = 10
SMB_PROTOCOL_TYPE: Final = "CIFS"

NETAPP_NAMESPACE: Final = "microsoft.netapp"
ACCOUNT_TYPE: Final = "netappaccounts"
CAPACITY_POOL_TYPE: Final = "capacitypools"
VOLUME_TYPE: Final = "volumes"
CHILD_TYPES: Final = (CAPACITY_POOL_TYPE, VOLUME_TYPE)
# subscriptions/{id}/resourceGroups/{rg}/providers/Microsoft.NetApp/netAppAccounts/{name}
ACCOUNT_ID_SEGMENTS: Final = 8


class InvalidResourceIdError(Exception):
    def __init__(self, resource_id: str) -> None:
        super().__init__(f"Not an Azure NetApp Files resource id: {resource_id}")


class AnfResourceId(NamedTuple):
    subscription_id: str
    resource_group: str
    account_name: str
    pool_name: str | None = None
    volume_name: str | None = None


def get_resource_group_id(subscription_id: str, resource_group: str) -> str:
    return f"/subscriptions/{subscription_id}/resourceGroups/{resource_group}"


def get_subnet_id(subscription_id: str, resource_group: str, vnet_name: str, subnet_name: str) -> str:
    return (
        get_resource_group_id(subscription_id, resource_group)
        + f"/providers/Microsoft.Network/virtualNetworks/{vnet_name}/subnets/{subnet_name}"
    )


def get_account_id(subscription_id: str, resource_group: str, account_name: str) -> str:
    return (
        get_resource_group_id(subscription_id, resource_group)
        + f"/providers/Microsoft.NetApp/netAppAccounts/{account_name}"
    )


def get_pool_id(subscription_id: str, resource_group: str, account_name: str, pool_name: str) -> str:
    return get_account_id(subscription_id, resource_group, account_name) + f"/capacityPools/{pool_name}"


def get_volume_id(
    subscription_id: str, resource_group: str, account_name: str, pool_name: str, volume_name: str
) -> str:
    return get_pool_id(subscription_id, resource_group, account_name, pool_name) + f"/volumes/{volume_name}"


def parse_anf_resource_id(resource_id: str) -> AnfResourceId:
    """Split an account, capacity pool or volume id into its names"""
    parsed = parse_resource_id(resource_id)
    depth: int = parsed.get("last_child_num", 0)
    # every segment has to be accounted for, a dangling child type is not parsed as a child
    segments = resource_id.strip("/").split("/")
    if (
        parsed.get("namespace", "").lower() != NETAPP_NAMESPACE
        or parsed.get("type", "").lower() != ACCOUNT_TYPE
        or not parsed.get("resource_group")
        or not parsed.get("name")
        or depth > len(CHILD_TYPES)
        or len(segments) != ACCOUNT_ID_SEGMENTS + 2 * depth
    ):
        raise InvalidResourceIdError(resource_id)
    child_names: list[str | None] = [None] * len(CHILD_TYPES)
    for i, child_type in enumerate(CHILD_TYPES[:depth]):
        if parsed.get(f"child_type_{i + 1}", "").lower() != child_type or not parsed.get(f"child_name_{i + 1}"):
            raise InvalidResourceIdError(resource_id)
        child_names[i] = parsed[f"child_name_{i + 1}"]
    pool_name, volume_name = child_names
    return AnfResourceId(
        parsed.get("subscription", ""), parsed["resource_group"], parsed["name"], pool_name, volume_name
    )


def now() -> str:
    """Return the current time in ISO format"""
    return datetime.now().isoformat()
