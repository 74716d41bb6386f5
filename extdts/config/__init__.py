from .loader import load_config
from .models import (
    EmitterConfig,
    ExtDtsConfig,
    ExtVersionConfig,
    OutputConfig,
    RegistryConfig,
    ToolchainConfig,
)

__all__ = [
    "EmitterConfig",
    "ExtDtsConfig",
    "ExtVersionConfig",
    "OutputConfig",
    "RegistryConfig",
    "ToolchainConfig",
    "load_config",
]
