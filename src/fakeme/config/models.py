"""設定データクラス"""

from dataclasses import dataclass, field


@dataclass
class SlackConfig:
    """Slack接続設定"""

    bot_token: str
    app_token: str


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのcompletionに渡すdict）"""

    model: str
    temperature: float = 0.9
    max_tokens: int = 300


@dataclass
class PersonaConfig:
    """ペルソナ設定

    Attributes:
        name: ペルソナの表示名
        profile_path: 取り込みツールが生成したプロファイルJSONのパス
        example_count: 1回のリクエストに含める例文の最大数
    """

    name: str
    profile_path: str = "data/persona.json"
    example_count: int = 50


@dataclass
class BehaviorConfig:
    """応答挙動設定

    Attributes:
        reply_chance: 応答する確率 (0.0 - 1.0)
        cooldown_ms: 同一チャンネルでの送信間隔の下限
        min_delay_ms: 応答前の待機時間の下限
        max_delay_ms: 応答前の待機時間の上限
        context_message_count: 会話ウィンドウとして取得するメッセージ数
        ignore_bots: 他のボットの発言を無視するか
        composing_reaction: 入力中表示として付けるリアクション名
    """

    reply_chance: float = 0.85
    cooldown_ms: int = 5000
    min_delay_ms: int = 1500
    max_delay_ms: int = 8000
    context_message_count: int = 25
    ignore_bots: bool = True
    composing_reaction: str = "eyes"


@dataclass
class HealthConfig:
    """ヘルスチェックサーバー設定"""

    enabled: bool = True
    port: int = 8080


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    slack: SlackConfig
    llm: dict[str, LLMConfig]
    persona: PersonaConfig
    channels: list[str]
    behavior: BehaviorConfig = field(default_factory=BehaviorConfig)
    health: HealthConfig = field(default_factory=HealthConfig)
    logging: LoggingConfig | None = None
