from .settings import Settings, ConfigurationError, get_settings

__all__ = ["Settings", "ConfigurationError", "get_settings"]
