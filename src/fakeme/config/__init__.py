"""設定管理モジュール"""

from fakeme.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from fakeme.config.models import (
    BehaviorConfig,
    Config,
    HealthConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
    SlackConfig,
)

__all__ = [
    "BehaviorConfig",
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "HealthConfig",
    "LLMConfig",
    "LoggingConfig",
    "PersonaConfig",
    "SlackConfig",
    "expand_env_vars",
    "load_config",
]
