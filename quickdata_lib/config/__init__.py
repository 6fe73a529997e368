from .config import Config, load_config, read_settings, DEFAULT_CONFIG_PATH

__all__ = ["Config", "load_config", "read_settings", "DEFAULT_CONFIG_PATH"]
