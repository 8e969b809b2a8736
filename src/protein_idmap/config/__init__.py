"""Configuration models and loaders."""

from .loader import ENV_PREFIX, load_config, parse_set_overrides
from .models import AnnotationConfig, HTTPClientConfig, MartConfig

__all__ = [
    "AnnotationConfig",
    "ENV_PREFIX",
    "HTTPClientConfig",
    "MartConfig",
    "load_config",
    "parse_set_overrides",
]
