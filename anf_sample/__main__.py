#!/usr/bin/env python
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# usage: python -m anf_sample [-h] [--async] [-c] [-d]
#
# Create an Azure NetApp Files account, capacity pool and SMB volume
#
# optional arguments:
#   -h, --help     show this help message and exit
#   --async        Run the async variant, authenticating with the service principal file AZURE_AUTH_LOCATION points to
#   -c, --cleanup  Delete the volume, capacity pool and account once they have been created
#   -d, --dry-run  Look resources up but only log what would be created or deleted

# stdlib
import argparse
from asyncio import run
from dataclasses import replace
from logging import WARNING, basicConfig, getLogger
from os import environ

# project
from anf_sample.config.env import LOG_LEVEL_SETTING
from anf_sample.config.settings import SampleSettings
from anf_sample.tasks.async_smb_volume_task import AsyncSmbVolumeTask
from anf_sample.tasks.auth import get_service_principal_credential, load_auth_file
from anf_sample.tasks.common import now
from anf_sample.tasks.console import display_console_app_header, write_console_message, write_error_message
from anf_sample.tasks.smb_volume_task import SmbVolumeTask

log = getLogger("anf_sample")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an Azure NetApp Files account, capacity pool and SMB volume"
    )
    parser.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Run the async variant, authenticating with the service principal file AZURE_AUTH_LOCATION points to",
    )
    parser.add_argument(
        "-c",
        "--cleanup",
        action="store_true",
        help="Delete the volume, capacity pool and account once they have been created",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Look resources up but only log what would be created or deleted",
    )
    return parser.parse_args(argv)


def configure_logging() -> str:
    level = environ.get(LOG_LEVEL_SETTING, "INFO").upper()
    if level not in {"ERROR", "WARN", "WARNING", "INFO", "DEBUG"}:
        level = "INFO"
    basicConfig(format="%(message)s")
    log.setLevel(level)
    # silence azure logging except for warnings and errors
    getLogger("azure").setLevel(WARNING)
    return level


async def run_async_sample(settings: SampleSettings, args: argparse.Namespace) -> None:
    auth_file = load_auth_file()
    settings = replace(settings, subscription_id=auth_file["subscriptionId"])
    settings.validate()
    async with AsyncSmbVolumeTask(settings, get_service_principal_credential(auth_file), args.dry_run) as task:
        await task.run()


def run_sample(args: argparse.Namespace) -> None:
    settings = SampleSettings.from_environment()
    if args.cleanup:
        settings = replace(settings, cleanup=True)
    if args.dry_run:
        log.info("Dry run enabled, no changes will be made")

    if args.use_async:
        run(run_async_sample(settings, args))
        return

    settings.validate()
    with SmbVolumeTask(settings, args.dry_run) as task:
        task.run()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    level = configure_logging()
    display_console_app_header()
    log.debug("Started at %s (log level %s)", now(), level)
    try:
        run_sample(args)
    except Exception as e:
        write_error_message(str(e))
        log.debug("Sample application failed", exc_info=True)
        return 1
    write_console_message("Sample application successfully completed execution")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
