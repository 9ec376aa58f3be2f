# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from typing import Any
from unittest import IsolatedAsyncioTestCase
from unittest.mock import AsyncMock, MagicMock, Mock, patch

# 3p
from azure.core.exceptions import ResourceNotFoundError

# project
from anf_sample.config.settings import SampleSettings

SUB_ID = "decc348e-ca9e-4925-b351-ae56b0d9f811"
RESOURCE_GROUP = "anf-rg"
LOCATION = "eastus"
ACCOUNT_NAME = "anf-python-example-account"
POOL_NAME = "anf-python-example-pool"
VOLUME_NAME = "anf-python-example-volume"

ACCOUNT_ID = (
    f"/subscriptions/{SUB_ID}/resourceGroups/{RESOURCE_GROUP}/providers/Microsoft.NetApp/netAppAccounts/{ACCOUNT_NAME}"
)
POOL_ID = f"{ACCOUNT_ID}/capacityPools/{POOL_NAME}"
VOLUME_ID = f"{POOL_ID}/volumes/{VOLUME_NAME}"
SUBNET_ID = (
    f"/subscriptions/{SUB_ID}/resourceGroups/{RESOURCE_GROUP}"
    "/providers/Microsoft.Network/virtualNetworks/vnet1/subnets/anf"
)


def make_settings(**overrides: Any) -> SampleSettings:
    values: dict[str, Any] = {
        "subscription_id": SUB_ID,
        "location": LOCATION,
        "resource_group": RESOURCE_GROUP,
        "vnet_name": "vnet1",
        "subnet_name": "anf",
        "account_name": ACCOUNT_NAME,
        "capacity_pool_name": POOL_NAME,
        "service_level": "Standard",
        "capacity_pool_size": 4398046511104,
        "volume_name": VOLUME_NAME,
        "volume_size": 107374182400,
        "domain_join_username": "testadmin",
        "dns_list": "10.0.2.4,10.0.2.5",
        "ad_fqdn": "testdomain.local",
        "smb_server_name_prefix": "testsmb",
    }
    values.update(overrides)
    return SampleSettings(**values)


class AsyncTestCase(IsolatedAsyncioTestCase):
    def patch_path(self, path: str, **kwargs: Any) -> MagicMock | AsyncMock:
        p = patch(path, **kwargs)
        self.addCleanup(p.stop)
        return p.start()


class TaskTestCase(AsyncTestCase):
    TASK_NAME: str = NotImplemented

    def patch(self, obj: str, **kwargs: Any):
        return self.patch_path(f"anf_sample.tasks.{self.TASK_NAME}.{obj}", **kwargs)

    def setUp(self) -> None:
        self.datadog_api_client = self.patch_path("anf_sample.tasks.task.ApiClient", return_value=MockClient())
        self.datadog_async_api_client = self.patch_path(
            "anf_sample.tasks.task.AsyncApiClient", return_value=AsyncMockClient()
        )
        self.datadog_logs_api = self.patch_path("anf_sample.tasks.task.LogsApi", return_value=Mock())
        self.datadog_metrics_api = self.patch_path("anf_sample.tasks.task.MetricsApi", return_value=Mock())
        self.env: dict[str, str] = {}
        task_env_mock = self.patch_path("anf_sample.tasks.task.environ", create=True)
        task_env_mock.get.side_effect = lambda k, default=None: self.env.get(k, default)
        env_env_mock = self.patch_path("anf_sample.config.env.environ", create=True)
        env_env_mock.get.side_effect = lambda k, default=None: self.env.get(k, default)


def mock(**kwargs: Any) -> Mock:
    m = Mock()
    for k, v in kwargs.items():
        setattr(m, k, v)
    return m


def MockClient(**kwargs: Any) -> MagicMock:
    """A MagicMock with the context manager methods set up to use as a client"""
    m = MagicMock(**kwargs)
    m.__enter__.return_value = m
    m.__exit__.return_value = None
    return m


def AsyncMockClient(**kwargs: Any) -> AsyncMock:
    """An AsyncMock with the context manager methods set up to use as a client"""
    m = AsyncMock(**kwargs)
    m.__aenter__.return_value = m
    m.__aexit__.return_value = None
    return m


def not_found(*args: Any, **kwargs: Any):
    raise ResourceNotFoundError("Resource not found")
