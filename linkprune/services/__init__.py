"""
Services package.
"""

from .config_svc import DEFAULT_CONFIG, FRAMEWORK_PROVIDERS, ConfigService

__all__ = [
    "DEFAULT_CONFIG",
    "FRAMEWORK_PROVIDERS",
    "ConfigService",
]
