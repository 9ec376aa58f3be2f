# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from typing import Any
from unittest import TestCase
from unittest.mock import patch

# 3p
from azure.core.exceptions import HttpResponseError

# project
from anf_sample.__main__ import main, parse_args
from anf_sample.tasks.tests.common import SUB_ID, AsyncMockClient, MockClient

ENVIRONMENT = {
    "AZURE_SUBSCRIPTION_ID": SUB_ID,
    "ANF_LOCATION": "eastus",
    "ANF_RESOURCE_GROUP": "anf-rg",
    "ANF_VNET_NAME": "vnet1",
    "ANF_SUBNET_NAME": "anf",
}
AUTH_FILE_SUB_ID = "0f6f1c3e-4a55-4d7b-9c1e-2b8d6f1a7e90"


class TestParseArgs(TestCase):
    def test_defaults(self):
        args = parse_args([])
        self.assertFalse(args.use_async)
        self.assertFalse(args.cleanup)
        self.assertFalse(args.dry_run)

    def test_flags(self):
        args = parse_args(["--async", "-c", "--dry-run"])
        self.assertTrue(args.use_async)
        self.assertTrue(args.cleanup)
        self.assertTrue(args.dry_run)


class TestMain(TestCase):
    def setUp(self) -> None:
        self.env: dict[str, str] = dict(ENVIRONMENT)
        env_patch = patch.dict("os.environ", self.env, clear=True)
        env_patch.start()
        self.addCleanup(env_patch.stop)
        self.patch("basicConfig")
        self.task_class = self.patch("SmbVolumeTask", return_value=MockClient())
        self.task = self.task_class.return_value

    def patch(self, obj: str, **kwargs: Any):
        p = patch(f"anf_sample.__main__.{obj}", **kwargs)
        self.addCleanup(p.stop)
        return p.start()

    def run_main(self, *argv: str) -> tuple[int, list[str]]:
        with self.assertLogs("anf_sample", level="INFO") as ctx:
            code = main(list(argv))
        return code, [r.getMessage() for r in ctx.records]

    def test_success(self):
        code, messages = self.run_main()

        self.assertEqual(code, 0)
        settings, dry_run = self.task_class.call_args.args
        self.assertEqual(settings.subscription_id, SUB_ID)
        self.assertFalse(settings.cleanup)
        self.assertFalse(dry_run)
        self.task.run.assert_called_once_with()
        self.assertEqual(messages[-1], "Sample application successfully completed execution")

    def test_cleanup_flag(self):
        code, _ = self.run_main("-c")

        self.assertEqual(code, 0)
        self.assertTrue(self.task_class.call_args.args[0].cleanup)

    def test_dry_run_flag(self):
        code, messages = self.run_main("-d")

        self.assertEqual(code, 0)
        self.assertTrue(self.task_class.call_args.args[1])
        self.assertIn("Dry run enabled, no changes will be made", messages)

    def test_placeholder_settings_fail_before_any_client_is_built(self):
        del self.env["ANF_LOCATION"]
        with patch.dict("os.environ", self.env, clear=True):
            code, messages = self.run_main()

        self.assertEqual(code, 1)
        self.task_class.assert_not_called()
        self.assertTrue(any("'location' is still set to the placeholder <location>" in m for m in messages))

    def test_task_failure_exit_code(self):
        self.task.run.side_effect = HttpResponseError("Conflict")

        code, messages = self.run_main()

        self.assertEqual(code, 1)
        self.assertIn("Conflict", messages)
        self.assertNotIn("Sample application successfully completed execution", messages)

    def test_async_variant(self):
        async_task_class = self.patch("AsyncSmbVolumeTask", return_value=AsyncMockClient())
        self.patch(
            "load_auth_file",
            return_value={
                "clientId": "client",
                "clientSecret": "secret",
                "subscriptionId": AUTH_FILE_SUB_ID,
                "tenantId": "tenant",
            },
        )
        credential = self.patch("get_service_principal_credential", return_value=AsyncMockClient())

        code, _ = self.run_main("--async", "--dry-run")

        self.assertEqual(code, 0)
        self.task_class.assert_not_called()
        settings, task_credential, dry_run = async_task_class.call_args.args
        self.assertEqual(settings.subscription_id, AUTH_FILE_SUB_ID)
        self.assertIs(task_credential, credential.return_value)
        self.assertTrue(dry_run)
        async_task_class.return_value.run.assert_awaited_once_with()
