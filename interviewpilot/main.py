"""Main application entry point for InterviewPilot."""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from pubsub import pub

from .config import InterviewPilotConfig
from .models.speaker import Speaker
from .services.interview_session import InterviewSession
from .timer.plan_parser import parse_interview_plan
from .ui.session_screen import SessionScreen

logger = logging.getLogger(__name__)


class Server:

    def __init__(self, config_path: str, log_level: Optional[str] = None):
        self.config = InterviewPilotConfig(config_path)
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level)
        self.audio_capture = None

    def init(self, role: str, plan_text: str, proxy_url: Optional[str] = None):
        logger.info("Initializing services...")
        if proxy_url:
            self.config.set('transcription.proxy_url', proxy_url)

        blocks = parse_interview_plan(plan_text)
        self.session = InterviewSession(self.config, Speaker.from_role(role), blocks)
        self.screen = SessionScreen(self.session)

        if self.config.get('audio.capture_microphone', False):
            # Imported lazily: PyAudio needs PortAudio at import time
            from .audio.capture import AudioCapture
            from .audio.audio_pub import AudioPublisher

            local_topic = f"interview_{self.session.session_id}.audio.local"
            self.audio_publisher = AudioPublisher(local_topic)
            pub.subscribe(self.session.on_local_audio, local_topic)
            self.audio_capture = AudioCapture(
                callback=self.audio_publisher.publish_audio_event,
                sample_rate=self.config.get('audio.sample_rate', 16000),
                chunk_size=self.config.get('audio.chunk_size', 4096),
                channels=self.config.get('audio.channels', 1),
            )

    def run(self, duration: Optional[int]):
        try:
            self.session.start()
            if self.audio_capture:
                self.audio_capture.start_recording()
            self.screen.run(duration)
        finally:
            self.cleanup()

    def cleanup(self):
        if self.audio_capture:
            self.audio_capture.stop_recording()
        self.session.shutdown()
        self.screen.close()
        for error in self.session.errors:
            print(f"⚠️  {error}")


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/interviewpilot.log')
    console_output = config.get('logging.console_output', True)
    
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)
    
    handlers = []
    
    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)
    
    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)
    
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)
    
    logger = logging.getLogger(__name__)
    logger.info("="*50)
    logger.info("InterviewPilot starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("="*50)


def main() -> None:
    """Main entry point for InterviewPilot."""
    parser = argparse.ArgumentParser(
        description="InterviewPilot - live interview timer and speaker-labelled transcript",
    )
    
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to configuration YAML file"
    )
    
    parser.add_argument(
        "--role",
        type=str,
        default="interviewer",
        choices=["interviewer", "candidate"],
        help="Role of the local participant (default: interviewer)"
    )
    
    parser.add_argument(
        "--plan-file",
        type=str,
        help="Interview plan, one '<label> - <minutes>' per line"
    )
    
    parser.add_argument(
        "--proxy-url",
        type=str,
        help="Speech proxy WebSocket URL (overrides config)"
    )
    
    parser.add_argument(
        "--duration",
        type=int,
        help="Stop automatically after this many seconds"
    )
    
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version="InterviewPilot v0.1.0"
    )
    
    args = parser.parse_args()

    try:
        server = Server(args.config, args.log_level)
        plan_text = Path(args.plan_file).read_text(encoding='utf-8') if args.plan_file else ""
        server.init(args.role, plan_text, args.proxy_url)
        server.run(args.duration)
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
