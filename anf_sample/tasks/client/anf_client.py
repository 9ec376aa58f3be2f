# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from contextlib import AbstractContextManager
from logging import Logger
from types import TracebackType
from typing import Self

# 3p
from azure.core.credentials import TokenCredential
from azure.core.exceptions import ResourceNotFoundError
from azure.mgmt.netapp import NetAppManagementClient
from azure.mgmt.netapp.models import ActiveDirectory, CapacityPool, NetAppAccount, Volume

# project
from anf_sample.tasks.common import SMB_PROTOCOL_TYPE, parse_anf_resource_id
from anf_sample.tasks.deploy_common import DEFAULT_INTERVAL_SECONDS, DEFAULT_RETRIES, wait_for_no_resource

AnfResource = NetAppAccount | CapacityPool | Volume


def build_active_directory(
    username: str, password: str, dns: str, domain: str, smb_server_name: str
) -> ActiveDirectory:
    return ActiveDirectory(
        username=username, password=password, dns=dns, domain=domain, smb_server_name=smb_server_name
    )


def build_smb_volume(location: str, creation_token: str, service_level: str, size: int, subnet_id: str) -> Volume:
    return Volume(
        location=location,
        creation_token=creation_token,
        service_level=service_level,
        usage_threshold=size,
        subnet_id=subnet_id,
        protocol_types=[SMB_PROTOCOL_TYPE],
    )


def get_smb_server_fqdn(volume: Volume) -> str | None:
    if not volume.mount_targets:
        return None
    return volume.mount_targets[0].smb_server_fqdn


class AnfClient(AbstractContextManager["AnfClient"]):
    """Azure NetApp Files lookups and CRUD, blocking on every long running operation"""

    def __init__(
        self,
        log: Logger,
        credential: TokenCredential,
        subscription_id: str,
        wait_interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        wait_retries: int = DEFAULT_RETRIES,
    ) -> None:
        self.log = log
        self.subscription_id = subscription_id
        self.wait_interval_seconds = wait_interval_seconds
        self.wait_retries = wait_retries
        self.netapp_client = NetAppManagementClient(credential, subscription_id)

    def __enter__(self) -> Self:
        self.netapp_client.__enter__()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.netapp_client.__exit__(exc_type, exc_val, exc_tb)

    # ===== Lookups ===== #
    def get_account(self, resource_group: str, account_name: str) -> NetAppAccount | None:
        try:
            return self.netapp_client.accounts.get(resource_group, account_name)
        except ResourceNotFoundError:
            return None

    def get_pool(self, resource_group: str, account_name: str, pool_name: str) -> CapacityPool | None:
        try:
            return self.netapp_client.pools.get(resource_group, account_name, pool_name)
        except ResourceNotFoundError:
            return None

    def get_volume(self, resource_group: str, account_name: str, pool_name: str, volume_name: str) -> Volume | None:
        try:
            return self.netapp_client.volumes.get(resource_group, account_name, pool_name, volume_name)
        except ResourceNotFoundError:
            return None

    def get_resource(self, resource_id: str) -> AnfResource | None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is None:
            return self.get_account(rid.resource_group, rid.account_name)
        if rid.volume_name is None:
            return self.get_pool(rid.resource_group, rid.account_name, rid.pool_name)
        return self.get_volume(rid.resource_group, rid.account_name, rid.pool_name, rid.volume_name)

    def resource_exists(self, resource_id: str) -> bool:
        return self.get_resource(resource_id) is not None

    # ===== Creation ===== #
    def create_account(
        self, resource_group: str, account_name: str, location: str, active_directory: ActiveDirectory
    ) -> NetAppAccount:
        body = NetAppAccount(location=location, active_directories=[active_directory])
        self.log.debug("Creating account %s in %s", account_name, resource_group)
        return self.netapp_client.accounts.begin_create_or_update(resource_group, account_name, body).result()

    def create_capacity_pool(
        self, resource_group: str, account_name: str, pool_name: str, location: str, service_level: str, size: int
    ) -> CapacityPool:
        body = CapacityPool(location=location, service_level=service_level, size=size)
        self.log.debug("Creating capacity pool %s under %s", pool_name, account_name)
        return self.netapp_client.pools.begin_create_or_update(resource_group, account_name, pool_name, body).result()

    def create_smb_volume(
        self,
        resource_group: str,
        account_name: str,
        pool_name: str,
        volume_name: str,
        location: str,
        service_level: str,
        size: int,
        subnet_id: str,
    ) -> Volume:
        body = build_smb_volume(location, volume_name, service_level, size, subnet_id)
        self.log.debug("Creating SMB volume %s under %s/%s", volume_name, account_name, pool_name)
        return self.netapp_client.volumes.begin_create_or_update(
            resource_group, account_name, pool_name, volume_name, body
        ).result()

    # ===== Deletion ===== #
    def wait_for_no_resource(self, resource_id: str) -> None:
        wait_for_no_resource(
            resource_id,
            lambda: self.resource_exists(resource_id),
            interval_seconds=self.wait_interval_seconds,
            retries=self.wait_retries,
        )

    def delete_volume(self, resource_id: str) -> None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is None or rid.volume_name is None:
            raise ValueError(f"Not a volume id: {resource_id}")
        self.netapp_client.volumes.begin_delete(
            rid.resource_group, rid.account_name, rid.pool_name, rid.volume_name
        ).result()
        self.wait_for_no_resource(resource_id)

    def delete_capacity_pool(self, resource_id: str) -> None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is None or rid.volume_name is not None:
            raise ValueError(f"Not a capacity pool id: {resource_id}")
        self.netapp_client.pools.begin_delete(rid.resource_group, rid.account_name, rid.pool_name).result()
        self.wait_for_no_resource(resource_id)

    def delete_account(self, resource_id: str) -> None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is not None:
            raise ValueError(f"Not an account id: {resource_id}")
        self.netapp_client.accounts.begin_delete(rid.resource_group, rid.account_name).result()
        self.wait_for_no_resource(resource_id)
