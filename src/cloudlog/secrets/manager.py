"""
AWS Secrets Manager accessor.

Blocking boto3 calls run through ``asyncio.to_thread``. Service errors are
translated into the ``SecretsError`` family:

- ``ResourceNotFoundException`` -> ``SecretNotFoundError``
- ``AccessDeniedException`` and decryption failures -> ``SecretAccessDeniedError``
- anything else, including network errors -> ``SecretsTransientError``
"""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import (
    SecretAccessDeniedError,
    SecretNotFoundError,
    SecretsError,
    SecretsTransientError,
)
from ..core.settings import default_region

_NOT_FOUND_CODES = frozenset({"ResourceNotFoundException"})
_ACCESS_DENIED_CODES = frozenset(
    {"AccessDeniedException", "AccessDenied", "DecryptionFailure"}
)


def translate_error(
    exc: Exception, *, operation: str, secret: str | None = None
) -> SecretsError:
    """Map a boto3/botocore exception onto the secrets error taxonomy."""
    context: dict[str, Any] = {"operation": operation}
    if secret is not None:
        context["secret"] = secret
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "")
        context["code"] = code
        if code in _NOT_FOUND_CODES:
            return SecretNotFoundError("secret not found", **context)
        if code in _ACCESS_DENIED_CODES:
            return SecretAccessDeniedError("access to secret denied", **context)
    context["error"] = str(exc)
    return SecretsTransientError("secrets manager request failed", **context)


class SecretsManager:
    """Read secrets from one region of AWS Secrets Manager."""

    def __init__(self, *, region: str | None = None, client: Any = None) -> None:
        self._region = region or default_region()
        self._client = client

    @property
    def region(self) -> str:
        return self._region

    async def _get_client(self) -> Any:
        if self._client is None:
            try:
                self._client = await asyncio.to_thread(
                    boto3.client, "secretsmanager", region_name=self._region
                )
            except BotoCoreError as exc:
                raise SecretsTransientError(
                    "failed to create secrets manager client",
                    region=self._region,
                    error=str(exc),
                ) from exc
        return self._client

    async def get_secret(self, name: str) -> str:
        """Return the value of secret ``name``.

        Binary secrets are decoded as UTF-8.
        """
        client = await self._get_client()
        try:
            result = await asyncio.to_thread(client.get_secret_value, SecretId=name)
        except (BotoCoreError, ClientError) as exc:
            raise translate_error(
                exc, operation="get_secret_value", secret=name
            ) from exc

        value = result.get("SecretString")
        if value is not None:
            return str(value)
        binary = result.get("SecretBinary")
        if binary is not None:
            return bytes(binary).decode("utf-8")
        return ""

    async def list_secret_names(self) -> list[str]:
        """Return the names of every secret, following pagination."""
        client = await self._get_client()
        names: list[str] = []
        kwargs: dict[str, Any] = {}
        while True:
            try:
                page = await asyncio.to_thread(client.list_secrets, **kwargs)
            except (BotoCoreError, ClientError) as exc:
                raise translate_error(exc, operation="list_secrets") from exc
            names.extend(
                entry["Name"] for entry in page.get("SecretList", []) if entry.get("Name")
            )
            token = page.get("NextToken")
            if not token:
                return names
            kwargs["NextToken"] = token

    async def get_all_secrets(self) -> dict[str, str]:
        """Return every secret as ``{name: value}``.

        One listing pass, then one ``get_secret`` per name. The first failure
        aborts the whole call.
        """
        secrets: dict[str, str] = {}
        for name in await self.list_secret_names():
            secrets[name] = await self.get_secret(name)
        return secrets


async def get_secret(name: str, *, region: str | None = None, client: Any = None) -> str:
    """Fetch one secret value. See ``SecretsManager.get_secret``."""
    return await SecretsManager(region=region, client=client).get_secret(name)


async def get_all_secrets(
    *, region: str | None = None, client: Any = None
) -> dict[str, str]:
    """Fetch every secret in the store. See ``SecretsManager.get_all_secrets``."""
    return await SecretsManager(region=region, client=client).get_all_secrets()
