from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.settings import Settings, load_settings
from .manager import SecretsManager


@runtime_checkable
class ConfigProvider(Protocol):
    """Configuration capability the rest of an application depends on."""

    async def load_config(self) -> Settings: ...

    async def get_secret(self, name: str) -> str: ...

    async def get_secrets(self) -> dict[str, str]: ...


class SecretsManagerConfigProvider:
    """``ConfigProvider`` backed by environment settings and Secrets Manager."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        secrets: SecretsManager | None = None,
    ) -> None:
        self._settings = settings
        self._secrets = secrets

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    def _manager(self) -> SecretsManager:
        if self._secrets is None:
            self._secrets = SecretsManager(region=self.settings.secrets.region)
        return self._secrets

    async def load_config(self) -> Settings:
        """Re-read settings from the environment and keep them."""
        self._settings = load_settings()
        return self._settings

    async def get_secret(self, name: str) -> str:
        return await self._manager().get_secret(name)

    async def get_secrets(self) -> dict[str, str]:
        return await self._manager().get_all_secrets()
