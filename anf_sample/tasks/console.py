# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from getpass import getpass
from logging import Logger, getLogger
from typing import Final

log = getLogger("anf_sample")

SEPARATOR: Final = "-" * 110
HEADER: Final = (
    "Azure NetApp Files Python SMB SDK Sample - Sample application that creates an SMB volume together "
    "with its account (with Active Directory connection) and capacity pool."
)
PASSWORD_PROMPT: Final = (
    "Please type Active Directory's user password that will domain join ANF's SMB server and press [ENTER]: "
)


class EmptyPasswordError(Exception):
    def __init__(self) -> None:
        super().__init__("Active Directory domain join password cannot be empty")


def display_console_app_header() -> None:
    log.info(SEPARATOR)
    log.info(HEADER)
    log.info(SEPARATOR)


def write_console_message(message: str, logger: Logger = log) -> None:
    logger.info(message)


def write_success_message(message: str, logger: Logger = log) -> None:
    logger.info("\t%s", message)


def write_error_message(message: str, logger: Logger = log) -> None:
    logger.error(message)


def get_console_password(prompt: str = PASSWORD_PROMPT) -> str:
    """Read a password from the terminal without echoing it"""
    password = getpass(prompt)
    if not password:
        raise EmptyPasswordError()
    return password
