# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from asyncio import to_thread
from sys import exc_info
from types import TracebackType
from typing import Self

# 3p
from azure.core.credentials_async import AsyncTokenCredential
from azure.core.exceptions import AzureError
from azure.mgmt.netapp.models import CapacityPool, NetAppAccount, Volume

# project
from anf_sample.config.settings import SampleSettings
from anf_sample.tasks.client.anf_client import build_active_directory, get_smb_server_fqdn
from anf_sample.tasks.client.async_anf_client import AsyncAnfClient
from anf_sample.tasks.console import get_console_password, write_console_message, write_success_message
from anf_sample.tasks.smb_volume_task import expected_resource_ids, resource_id_of
from anf_sample.tasks.task import AsyncTask

ASYNC_SMB_VOLUME_TASK_NAME = "async_smb_volume_task"


class AsyncSmbVolumeTask(AsyncTask):
    """The `SmbVolumeTask` runbook on the aio client, one awaited call at a time"""

    NAME = ASYNC_SMB_VOLUME_TASK_NAME

    def __init__(self, settings: SampleSettings, credential: AsyncTokenCredential, dry_run: bool = False) -> None:
        super().__init__(settings, dry_run)
        self.credential = credential
        write_console_message("Instantiating a new Azure NetApp Files management client...", self.log)
        self.client = AsyncAnfClient(self.log, credential, settings.subscription_id)

    async def __aenter__(self) -> Self:
        await super().__aenter__()
        try:
            await self.credential.__aenter__()
            try:
                await self.client.__aenter__()
            except BaseException:
                await self.credential.__aexit__(*exc_info())
                raise
        except BaseException:
            await super().__aexit__(*exc_info())
            raise
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_value: BaseException | None, traceback: TracebackType | None
    ) -> None:
        try:
            await self.client.__aexit__(exc_type, exc_value, traceback)
        finally:
            try:
                await self.credential.__aexit__(exc_type, exc_value, traceback)
            finally:
                await super().__aexit__(exc_type, exc_value, traceback)

    async def run(self) -> None:
        password = "" if self.dry_run else await to_thread(get_console_password)

        account = await self.ensure_account(password)
        pool = await self.ensure_capacity_pool()
        volume = await self.ensure_volume()

        if not self.settings.cleanup:
            return

        write_console_message("Cleaning up all created resources", self.log)
        volume_id, pool_id, account_id = expected_resource_ids(self.settings)
        await self.cleanup(
            resource_id_of(volume, volume_id),
            resource_id_of(pool, pool_id),
            resource_id_of(account, account_id),
        )

    async def ensure_account(self, password: str) -> NetAppAccount | None:
        s = self.settings
        write_console_message("Creating Azure NetApp Files Account...", self.log)
        account = await self.client.get_account(s.resource_group, s.account_name)
        if account is not None:
            write_console_message("Account already exists", self.log)
            return account
        if self.dry_run:
            write_console_message(f"Would create account {s.account_name} in {s.resource_group}", self.log)
            return None

        active_directory = build_active_directory(
            s.domain_join_username, password, s.dns_list, s.ad_fqdn, s.smb_server_name_prefix
        )
        try:
            account = await self.client.create_account(s.resource_group, s.account_name, s.location, active_directory)
        except AzureError as e:
            write_console_message(f"An error occurred while creating account: {e.message}", self.log)
            raise
        write_success_message(f"Account successfully created, resourceId: {account.id}", self.log)
        return account

    async def ensure_capacity_pool(self) -> CapacityPool | None:
        s = self.settings
        write_console_message("Creating Capacity Pool...", self.log)
        pool = await self.client.get_pool(s.resource_group, s.account_name, s.capacity_pool_name)
        if pool is not None:
            write_console_message("Capacity Pool already exists", self.log)
            return pool
        if self.dry_run:
            write_console_message(f"Would create capacity pool {s.capacity_pool_name} in {s.account_name}", self.log)
            return None

        try:
            pool = await self.client.create_capacity_pool(
                s.resource_group,
                s.account_name,
                s.capacity_pool_name,
                s.location,
                s.service_level,
                s.capacity_pool_size,
            )
        except AzureError as e:
            write_console_message(f"An error occurred while creating capacity pool: {e.message}", self.log)
            raise
        write_success_message(f"Capacity Pool successfully created, resourceId: {pool.id}", self.log)
        return pool

    async def ensure_volume(self) -> Volume | None:
        s = self.settings
        write_console_message("Creating SMB Volume...", self.log)
        volume = await self.client.get_volume(s.resource_group, s.account_name, s.capacity_pool_name, s.volume_name)
        if volume is not None:
            write_console_message("Volume already exists", self.log)
            return volume
        if self.dry_run:
            write_console_message(f"Would create SMB volume {s.volume_name} in {s.capacity_pool_name}", self.log)
            return None

        try:
            volume = await self.client.create_smb_volume(
                s.resource_group,
                s.account_name,
                s.capacity_pool_name,
                s.volume_name,
                s.location,
                s.service_level,
                s.volume_size,
                s.subnet_id,
            )
        except AzureError as e:
            write_console_message(f"An error occurred while creating volume: {e.message}", self.log)
            raise
        write_success_message(f"Volume successfully created, resourceId: {volume.id}", self.log)
        write_console_message(f"SMB Server FQDN: {get_smb_server_fqdn(volume)}", self.log)
        return volume

    async def cleanup(self, volume_id: str, pool_id: str, account_id: str) -> None:
        if self.dry_run:
            for resource_id in (volume_id, pool_id, account_id):
                write_console_message(f"Would delete {resource_id}", self.log)
            return

        write_console_message("Deleting Volume...", self.log)
        await self.client.delete_volume(volume_id)
        write_success_message(f"Volume successfully deleted: {volume_id}", self.log)

        write_console_message("Deleting Capacity Pool...", self.log)
        await self.client.delete_capacity_pool(pool_id)
        write_success_message(f"Capacity Pool successfully deleted: {pool_id}", self.log)

        write_console_message("Deleting ANF Account...", self.log)
        await self.client.delete_account(account_id)
        write_success_message(f"ANF Account successfully deleted: {account_id}", self.log)
