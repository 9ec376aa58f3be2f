# Unless explicitly stated otherwise all files in this repository are licensed under the Apache-2 License.

# This product includes software developed at Datadog (https://www.datadoghq.com/) Copyright 2025 Datadog, Inc.

# stdlib
from json import JSONDecodeError, loads
from logging import getLogger
from typing import Any, Final, TypedDict

# 3p
from azure.identity import DefaultAzureCredential
from azure.identity.aio import ClientSecretCredential
from jsonschema import ValidationError, validate

# project
from anf_sample.config.env import AUTH_LOCATION_SETTING, get_config_option

log = getLogger(__name__)

DEFAULT_AUTHORITY_HOST: Final = "https://login.microsoftonline.com"


class AuthFile(TypedDict, total=False):
    clientId: str
    clientSecret: str
    subscriptionId: str
    tenantId: str
    activeDirectoryEndpointUrl: str


AUTH_FILE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "clientId": {"type": "string", "minLength": 1},
        "clientSecret": {"type": "string", "minLength": 1},
        "subscriptionId": {"type": "string", "minLength": 1},
        "tenantId": {"type": "string", "minLength": 1},
        "activeDirectoryEndpointUrl": {"type": "string", "minLength": 1},
    },
    "required": ["clientId", "clientSecret", "subscriptionId", "tenantId"],
}


class AuthFileError(Exception):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to use auth file {path}: {reason}")


def get_credential() -> DefaultAzureCredential:
    """Bearer token credential, picked from the environment, managed identity or the Azure CLI login"""
    return DefaultAzureCredential()


def read_auth_file(path: str) -> AuthFile:
    try:
        with open(path) as f:
            auth_file = loads(f.read())
        validate(instance=auth_file, schema=AUTH_FILE_SCHEMA)
    except OSError as e:
        raise AuthFileError(path, e.strerror or str(e)) from e
    except JSONDecodeError as e:
        raise AuthFileError(path, f"invalid JSON ({e.msg})") from e
    except ValidationError as e:
        raise AuthFileError(path, e.message) from e
    return auth_file


def load_auth_file() -> AuthFile:
    """Read the auth file `AZURE_AUTH_LOCATION` points to"""
    return read_auth_file(get_config_option(AUTH_LOCATION_SETTING))


def get_service_principal_credential(auth_file: AuthFile) -> ClientSecretCredential:
    log.debug("Authenticating as service principal %s", auth_file["clientId"])
    return ClientSecretCredential(
        auth_file["tenantId"],
        auth_file["clientId"],
        auth_file["clientSecret"],
        authority=auth_file.get("activeDirectoryEndpointUrl", DEFAULT_AUTHORITY_HOST),
    )
