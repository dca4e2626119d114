"""Configuration module for the car listing engine."""

from .engine_config import (
    ENGINE_CONFIG,
    EngineSettings,
    DebounceConfig,
    FetchConfig,
    RetryConfig,
    configure_logging,
    get_engine_settings,
    load_engine_config,
)

__all__ = [
    'ENGINE_CONFIG',
    'EngineSettings',
    'DebounceConfig',
    'FetchConfig',
    'RetryConfig',
    'configure_logging',
    'get_engine_settings',
    'load_engine_config',
]
