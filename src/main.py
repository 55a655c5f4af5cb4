import logging
import os
import signal
import sys
from typing import Callable, Optional

from app_config import (
    CONFIG_PATH_ENV,
    AppConfig,
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)
from audio import AudioConfig, AudioConfigurationError, ToneEngine, ToneError, TonePlayer
from notify import (
    DesktopNotifier,
    NotifyConfig,
    NotifyConfigurationError,
    PlyerNotificationBackend,
)
from pomodoro import PomodoroTimer, SchedulerTickSource
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks, Scheduler
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(request_stop: Callable[[], None]) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logging.getLogger("pomodoro_app").info(
            "%s received, stopping...",
            signal.Signals(signum).name,
        )
        request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_tone_player(app_config: AppConfig, logger: logging.Logger) -> Optional[TonePlayer]:
    """Create the tone player, or None when audio is disabled or unavailable."""
    try:
        audio_config = AudioConfig.from_settings(app_config.audio)
    except AudioConfigurationError as error:
        logger.error(f"Audio configuration error: {error}")
        logger.warning("Continuing without completion tone.")
        return None
    if not audio_config.enabled:
        logger.info("Completion tone disabled")
        return None

    try:
        # PortAudio is loaded when sounddevice is imported.
        from audio.output import SoundDeviceAudioOutput
    except OSError as error:
        logger.warning("Audio output unavailable, continuing without tone: %s", error)
        return None

    try:
        engine = ToneEngine(audio_config)
    except ToneError as error:
        logger.warning("Tone engine disabled: %s", error)
        return None

    return TonePlayer(
        engine=engine,
        output=SoundDeviceAudioOutput(
            output_device_index=audio_config.output_device_index,
            logger=logging.getLogger("audio.output"),
        ),
        logger=logging.getLogger("audio"),
    )


def build_notifier(app_config: AppConfig, logger: logging.Logger) -> Optional[DesktopNotifier]:
    try:
        notify_config = NotifyConfig.from_settings(app_config.notifications)
    except NotifyConfigurationError as error:
        logger.error(f"Notification configuration error: {error}")
        logger.warning("Continuing without desktop notifications.")
        return None

    return DesktopNotifier(
        config=notify_config,
        backend=PlyerNotificationBackend(
            notify_config,
            logger=logging.getLogger("notify.backend"),
        ),
        logger=logging.getLogger("notify"),
    )


def build_ui_server(app_config: AppConfig, logger: logging.Logger) -> Optional[UIServer]:
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error(f"UI server configuration error: {error}")
        logger.warning("Continuing without UI server.")
        return None

    if not ui_server_config.enabled:
        logger.info("UI server disabled")
        return None

    return UIServer(
        config=ui_server_config,
        logger=logging.getLogger("ui_server"),
    )


def start_ui_server(ui_server: UIServer, logger: logging.Logger) -> bool:
    try:
        logger.info("Starting UI server...")
        ui_server.start(timeout_seconds=5.0)
    except Exception as error:
        logger.error(f"UI server startup failed: {error}")
        logger.warning("Continuing without UI server.")
        return False

    logger.info(
        "UI server ready at http://%s:%d",
        ui_server.host,
        ui_server.port,
    )
    return True


def main(argv: Optional[list[str]] = None) -> int:
    """Run the pomodoro timer with its websocket control page."""
    args = sys.argv[1:] if argv is None else argv
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path(args[0] if args else None)
        explicit = bool(args) or bool(os.getenv(CONFIG_PATH_ENV))
        app_config = load_app_config(str(config_path), required=explicit)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1

    logging.getLogger().setLevel(app_config.runtime.log_level)
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    else:
        logger.info("No config file at %s; using defaults", config_path)

    scheduler = Scheduler(logger=logging.getLogger("runtime.scheduler"))
    notifier = build_notifier(app_config, logger)
    pomodoro_timer = PomodoroTimer(
        scheduler=scheduler,
        tick_source=SchedulerTickSource(
            scheduler,
            interval_seconds=app_config.runtime.tick_interval_seconds,
            logger=logging.getLogger("pomodoro.ticks"),
        ),
        notifier=notifier,
        tone_player=build_tone_player(app_config, logger),
        auto_start_delay_seconds=app_config.runtime.auto_start_delay_seconds,
        logger=logging.getLogger("pomodoro"),
    )

    ui_server = build_ui_server(app_config, logger)
    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            scheduler=scheduler,
            pomodoro_timer=pomodoro_timer,
            notifier=notifier,
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    if ui_server is None or not start_ui_server(ui_server, logger):
        logger.warning("No UI server running; the timer cannot receive commands.")
    return engine.run()


if __name__ == "__main__":
    raise SystemExit(main())
