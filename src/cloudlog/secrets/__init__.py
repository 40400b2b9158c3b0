"""
Secrets Manager and Lambda environment helpers.

Credentials come from the ambient boto3 credential chain.
"""

from .environment import REGION_VARIABLE, set_environment
from .manager import SecretsManager, get_all_secrets, get_secret, translate_error
from .provider import ConfigProvider, SecretsManagerConfigProvider

__all__ = [
    "REGION_VARIABLE",
    "ConfigProvider",
    "SecretsManager",
    "SecretsManagerConfigProvider",
    "get_all_secrets",
    "get_secret",
    "set_environment",
    "translate_error",
]
