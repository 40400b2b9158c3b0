"""
Lambda environment configuration.

``set_environment`` merges the region (and any extra variables) into a
function's existing environment variables. Failures raise
``EnvironmentUpdateError``; the caller decides whether that is fatal.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core import diagnostics
from ..core.errors import EnvironmentUpdateError

REGION_VARIABLE = "AWS_REGION"


def _error_code(exc: Exception) -> str | None:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return None


async def set_environment(
    function_name: str,
    region: str,
    *,
    variables: Mapping[str, str] | None = None,
    region_variable: str = REGION_VARIABLE,
    client: Any = None,
) -> dict[str, str]:
    """Set ``region_variable=region`` (plus ``variables``) on a Lambda function.

    Existing variables are kept; new values win on conflict. Returns the
    full variable mapping that was applied.
    """
    if not function_name:
        raise EnvironmentUpdateError("function_name must not be empty")

    try:
        if client is None:
            client = await asyncio.to_thread(boto3.client, "lambda", region_name=region)
        current = await asyncio.to_thread(
            client.get_function_configuration, FunctionName=function_name
        )
    except (BotoCoreError, ClientError) as exc:
        raise EnvironmentUpdateError(
            "failed to read function configuration",
            function=function_name,
            code=_error_code(exc),
            error=str(exc),
        ) from exc

    merged: dict[str, str] = dict(
        (current.get("Environment") or {}).get("Variables") or {}
    )
    merged[region_variable] = region
    if variables:
        merged.update(variables)

    try:
        await asyncio.to_thread(
            client.update_function_configuration,
            FunctionName=function_name,
            Environment={"Variables": merged},
        )
    except (BotoCoreError, ClientError) as exc:
        raise EnvironmentUpdateError(
            "failed to update function configuration",
            function=function_name,
            code=_error_code(exc),
            error=str(exc),
        ) from exc

    diagnostics.debug(
        "environment",
        "environment variables set for function",
        function=function_name,
        variables=sorted(merged),
    )
    return merged
