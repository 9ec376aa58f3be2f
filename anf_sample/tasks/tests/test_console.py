# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from logging import getLogger
from unittest import TestCase
from unittest.mock import patch

# project
from anf_sample.tasks.console import (
    HEADER,
    EmptyPasswordError,
    display_console_app_header,
    get_console_password,
    write_console_message,
    write_error_message,
    write_success_message,
)


class TestConsole(TestCase):
    def test_header(self):
        with self.assertLogs("anf_sample", level="INFO") as ctx:
            display_console_app_header()
        self.assertEqual(len(ctx.records), 3)
        self.assertEqual(ctx.records[1].getMessage(), HEADER)

    def test_messages(self):
        with self.assertLogs("anf_sample", level="INFO") as ctx:
            write_console_message("Creating Capacity Pool...")
            write_success_message("Capacity Pool successfully created")
            write_error_message("oops")
        self.assertEqual(
            ctx.output,
            [
                "INFO:anf_sample:Creating Capacity Pool...",
                "INFO:anf_sample:\tCapacity Pool successfully created",
                "ERROR:anf_sample:oops",
            ],
        )

    def test_messages_to_other_logger(self):
        logger = getLogger("anf_sample.tasks.task.SmbVolumeTask")
        with self.assertLogs(logger, level="INFO") as ctx:
            write_console_message("Account already exists", logger)
        self.assertEqual(ctx.output, ["INFO:anf_sample.tasks.task.SmbVolumeTask:Account already exists"])

    @patch("anf_sample.tasks.console.getpass", return_value="hunter2")
    def test_get_console_password(self, getpass):
        self.assertEqual(get_console_password("Password: "), "hunter2")
        getpass.assert_called_once_with("Password: ")

    @patch("anf_sample.tasks.console.getpass", return_value="")
    def test_empty_password(self, _):
        with self.assertRaises(EmptyPasswordError):
            get_console_password()
