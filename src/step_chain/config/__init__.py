from .loader import ConfigError, load_batch_defaults, load_yaml_config
from .models import BatchDefaults

__all__ = ["BatchDefaults", "ConfigError", "load_batch_defaults", "load_yaml_config"]
