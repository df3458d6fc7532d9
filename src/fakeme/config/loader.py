"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from fakeme.config.models import (
    BehaviorConfig,
    Config,
    HealthConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
    SlackConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _validate_range(
    value: Any,
    path: str,
    minimum: float | None = None,
    maximum: float | None = None,
) -> None:
    """数値が範囲内にあることを検証する

    Raises:
        ConfigValidationError: 数値でない、または範囲外
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(f"'{path}' must be a number, got {value!r}")
    if minimum is not None and value < minimum:
        raise ConfigValidationError(f"'{path}' must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise ConfigValidationError(f"'{path}' must be <= {maximum}, got {value}")


def _load_llm(llm_data: dict[str, Any]) -> dict[str, LLMConfig]:
    # defaultは必須
    _validate_required_field(llm_data, "default", "llm")
    llm: dict[str, LLMConfig] = {}
    for key, llm_item in llm_data.items():
        model = _validate_required_field(llm_item, "model", f"llm.{key}")
        config = LLMConfig(
            model=model,
            temperature=llm_item.get("temperature", 0.9),
            max_tokens=llm_item.get("max_tokens", 300),
        )
        _validate_range(config.temperature, f"llm.{key}.temperature", 0, 2)
        _validate_range(config.max_tokens, f"llm.{key}.max_tokens", 1)
        llm[key] = config
    return llm


def _load_behavior(behavior_data: dict[str, Any]) -> BehaviorConfig:
    defaults = BehaviorConfig()
    behavior = BehaviorConfig(
        reply_chance=behavior_data.get("reply_chance", defaults.reply_chance),
        cooldown_ms=behavior_data.get("cooldown_ms", defaults.cooldown_ms),
        min_delay_ms=behavior_data.get("min_delay_ms", defaults.min_delay_ms),
        max_delay_ms=behavior_data.get("max_delay_ms", defaults.max_delay_ms),
        context_message_count=behavior_data.get(
            "context_message_count", defaults.context_message_count
        ),
        ignore_bots=behavior_data.get("ignore_bots", defaults.ignore_bots),
        composing_reaction=behavior_data.get(
            "composing_reaction", defaults.composing_reaction
        ),
    )

    _validate_range(behavior.reply_chance, "behavior.reply_chance", 0, 1)
    _validate_range(behavior.cooldown_ms, "behavior.cooldown_ms", 0)
    _validate_range(behavior.min_delay_ms, "behavior.min_delay_ms", 0)
    _validate_range(
        behavior.max_delay_ms, "behavior.max_delay_ms", behavior.min_delay_ms
    )
    _validate_range(
        behavior.context_message_count, "behavior.context_message_count", 1
    )
    for name in ("min_delay_ms", "max_delay_ms", "context_message_count"):
        if not isinstance(getattr(behavior, name), int):
            raise ConfigValidationError(f"'behavior.{name}' must be an integer")
    if not isinstance(behavior.ignore_bots, bool):
        raise ConfigValidationError("'behavior.ignore_bots' must be a boolean")

    return behavior


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落、または値が不正
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)

    if not isinstance(raw_data, dict):
        raise ConfigValidationError("Config file must contain a mapping")

    # 環境変数を展開
    data = _expand_recursive(raw_data)

    # 必須セクションの検証
    slack_data = _validate_required_field(data, "slack")
    llm_data = _validate_required_field(data, "llm")
    persona_data = _validate_required_field(data, "persona")
    channels_data = _validate_required_field(data, "channels")

    # SlackConfig
    slack = SlackConfig(
        bot_token=_validate_required_field(slack_data, "bot_token", "slack"),
        app_token=_validate_required_field(slack_data, "app_token", "slack"),
    )

    llm = _load_llm(llm_data)

    # PersonaConfig
    persona = PersonaConfig(
        name=_validate_required_field(persona_data, "name", "persona"),
        profile_path=persona_data.get("profile_path", "data/persona.json"),
        example_count=persona_data.get("example_count", 50),
    )
    _validate_range(persona.example_count, "persona.example_count", 1)

    # channels
    if not isinstance(channels_data, list) or not channels_data:
        raise ConfigValidationError("'channels' must be a non-empty list")
    channels = [str(channel_id) for channel_id in channels_data]
    if any(not channel_id for channel_id in channels):
        raise ConfigValidationError("'channels' must not contain empty IDs")

    behavior = _load_behavior(data.get("behavior") or {})

    # HealthConfig (optional)
    health_data = data.get("health") or {}
    health = HealthConfig(
        enabled=health_data.get("enabled", True),
        port=health_data.get("port", 8080),
    )
    _validate_range(health.port, "health.port", 0, 65535)

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        slack=slack,
        llm=llm,
        persona=persona,
        channels=channels,
        behavior=behavior,
        health=health,
        logging=logging_config,
    )
