# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from contextlib import AbstractAsyncContextManager
from logging import Logger
from types import TracebackType
from typing import Self

# 3p
from azure.core.credentials_async import AsyncTokenCredential
from azure.core.exceptions import ResourceNotFoundError
from azure.mgmt.netapp.aio import NetAppManagementClient
from azure.mgmt.netapp.models import ActiveDirectory, CapacityPool, NetAppAccount, Volume

# project
from anf_sample.tasks.client.anf_client import AnfResource, build_smb_volume
from anf_sample.tasks.common import parse_anf_resource_id
from anf_sample.tasks.deploy_common import DEFAULT_INTERVAL_SECONDS, DEFAULT_RETRIES, async_wait_for_no_resource


class AsyncAnfClient(AbstractAsyncContextManager["AsyncAnfClient"]):
    """Same surface as `AnfClient`, awaiting the aio management client"""

    def __init__(
        self,
        log: Logger,
        credential: AsyncTokenCredential,
        subscription_id: str,
        wait_interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        wait_retries: int = DEFAULT_RETRIES,
    ) -> None:
        self.log = log
        self.subscription_id = subscription_id
        self.wait_interval_seconds = wait_interval_seconds
        self.wait_retries = wait_retries
        self.netapp_client = NetAppManagementClient(credential, subscription_id)

    async def __aenter__(self) -> Self:
        await self.netapp_client.__aenter__()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        await self.netapp_client.__aexit__(exc_type, exc_val, exc_tb)

    async def get_account(self, resource_group: str, account_name: str) -> NetAppAccount | None:
        try:
            return await self.netapp_client.accounts.get(resource_group, account_name)
        except ResourceNotFoundError:
            return None

    async def get_pool(self, resource_group: str, account_name: str, pool_name: str) -> CapacityPool | None:
        try:
            return await self.netapp_client.pools.get(resource_group, account_name, pool_name)
        except ResourceNotFoundError:
            return None

    async def get_volume(
        self, resource_group: str, account_name: str, pool_name: str, volume_name: str
    ) -> Volume | None:
        try:
            return await self.netapp_client.volumes.get(resource_group, account_name, pool_name, volume_name)
        except ResourceNotFoundError:
            return None

    async def get_resource(self, resource_id: str) -> AnfResource | None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is None:
            return await self.get_account(rid.resource_group, rid.account_name)
        if rid.volume_name is None:
            return await self.get_pool(rid.resource_group, rid.account_name, rid.pool_name)
        return await self.get_volume(rid.resource_group, rid.account_name, rid.pool_name, rid.volume_name)

    async def resource_exists(self, resource_id: str) -> bool:
        return await self.get_resource(resource_id) is not None

    async def create_account(
        self, resource_group: str, account_name: str, location: str, active_directory: ActiveDirectory
    ) -> NetAppAccount:
        body = NetAppAccount(location=location, active_directories=[active_directory])
        self.log.debug("Creating account %s in %s", account_name, resource_group)
        poller = await self.netapp_client.accounts.begin_create_or_update(resource_group, account_name, body)
        return await poller.result()

    async def create_capacity_pool(
        self, resource_group: str, account_name: str, pool_name: str, location: str, service_level: str, size: int
    ) -> CapacityPool:
        body = CapacityPool(location=location, service_level=service_level, size=size)
        self.log.debug("Creating capacity pool %s under %s", pool_name, account_name)
        poller = await self.netapp_client.pools.begin_create_or_update(resource_group, account_name, pool_name, body)
        return await poller.result()

    async def create_smb_volume(
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
        poller = await self.netapp_client.volumes.begin_create_or_update(
            resource_group, account_name, pool_name, volume_name, body
        )
        return await poller.result()

    async def wait_for_no_resource(self, resource_id: str) -> None:
        async def exists() -> bool:
            return await self.resource_exists(resource_id)

        await async_wait_for_no_resource(
            resource_id, exists, interval_seconds=self.wait_interval_seconds, retries=self.wait_retries
        )

    async def delete_volume(self, resource_id: str) -> None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is None or rid.volume_name is None:
            raise ValueError(f"Not a volume id: {resource_id}")
        poller = await self.netapp_client.volumes.begin_delete(
            rid.resource_group, rid.account_name, rid.pool_name, rid.volume_name
        )
        await poller.result()
        await self.wait_for_no_resource(resource_id)

    async def delete_capacity_pool(self, resource_id: str) -> None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is None or rid.volume_name is not None:
            raise ValueError(f"Not a capacity pool id: {resource_id}")
        poller = await self.netapp_client.pools.begin_delete(rid.resource_group, rid.account_name, rid.pool_name)
        await poller.result()
        await self.wait_for_no_resource(resource_id)

    async def delete_account(self, resource_id: str) -> None:
        rid = parse_anf_resource_id(resource_id)
        if rid.pool_name is not None:
            raise ValueError(f"Not an account id: {resource_id}")
        poller = await self.netapp_client.accounts.begin_delete(rid.resource_group, rid.account_name)
        await poller.result()
        await self.wait_for_no_resource(resource_id)
