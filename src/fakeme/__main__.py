"""アプリケーションのエントリポイント"""

import asyncio
import logging
import signal
import sys
from pathlib import Path

from fakeme.application.handlers import MessageHandler
from fakeme.application.services import DeliveryPacer
from fakeme.config import ConfigError, LoggingConfig, load_config
from fakeme.domain.exceptions import PersonaLoadError
from fakeme.domain.services import CooldownTracker, ResponseDecision
from fakeme.infrastructure.http.health_server import HealthServer
from fakeme.infrastructure.llm import (
    LiteLLMResponseGenerator,
    LLMClient,
    PersonaPromptBuilder,
)
from fakeme.infrastructure.persona import load_persona
from fakeme.infrastructure.slack import (
    SlackAppRunner,
    SlackConversationHistoryService,
    SlackEventAdapter,
    SlackMessagingService,
    SlackUserDirectory,
    create_slack_app,
)
from fakeme.presentation import register_handlers

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Update handler format if specified
    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    # Configure individual loggers
    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


async def main() -> None:
    """アプリケーションを起動する"""
    config_path = Path("config.yaml")
    if not config_path.exists():
        logger.error("config.yaml not found")
        sys.exit(1)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    configure_logging(config.logging)

    try:
        persona = load_persona(config.persona.profile_path)
    except (OSError, PersonaLoadError) as e:
        logger.error("Failed to load persona: %s", e)
        sys.exit(1)

    app = create_slack_app(config.slack)
    behavior = config.behavior

    messaging_service = SlackMessagingService(
        app.client, composing_reaction=behavior.composing_reaction
    )
    bot_user_id = await messaging_service.get_bot_user_id()
    logger.info("Bot user ID: %s", bot_user_id)

    # Build dependencies
    users = SlackUserDirectory(app.client)
    event_adapter = SlackEventAdapter(users)
    history_service = SlackConversationHistoryService(app.client, users)

    llm_client = LLMClient(config.llm["default"])
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    response_generator = LiteLLMResponseGenerator(
        llm_client,
        debug_llm_messages=debug_llm_messages,
    )

    cooldown = CooldownTracker(behavior.cooldown_ms)
    decision = ResponseDecision(
        channels=config.channels,
        bot_user_id=bot_user_id,
        behavior=behavior,
        cooldown=cooldown,
    )
    pacer = DeliveryPacer(
        messaging_service=messaging_service,
        response_generator=response_generator,
        cooldown=cooldown,
        behavior=behavior,
        display_name=persona.display_name,
    )
    message_handler = MessageHandler(
        decision=decision,
        history_service=history_service,
        instruction_builder=PersonaPromptBuilder(config.persona.example_count),
        pacer=pacer,
        cooldown=cooldown,
        persona=persona,
        bot_user_id=bot_user_id,
        context_message_count=behavior.context_message_count,
    )

    register_handlers(app, message_handler, event_adapter)

    runner = SlackAppRunner(app, config.slack.app_token)
    health_server: HealthServer | None = None
    if config.health.enabled:
        health_server = HealthServer(slack_runner=runner, port=config.health.port)
        await health_server.start()

    logger.info("Starting as %s...", persona.display_name)
    logger.info("Watching %d channel(s)", len(config.channels))
    logger.info("Reply chance: %.0f%%", behavior.reply_chance * 100)
    logger.info("Cooldown: %dms", behavior.cooldown_ms)

    runner_task = asyncio.create_task(runner.start())

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    await stop_event.wait()

    logger.info("Shutting down...")

    closed = await runner.close(timeout=5.0)
    if not closed:
        logger.warning("Runner close timed out, cancelling tasks...")

    runner_task.cancel()
    await asyncio.gather(runner_task, return_exceptions=True)

    if health_server is not None:
        await health_server.stop()

    logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
