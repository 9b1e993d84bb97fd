"""
Zero-Configuration management for EventStream
All settings have sensible defaults - no .env required
"""
import os
from pathlib import Path

from .sse.framing import FramingPolicy


class Config:
    """Application configuration with zero-config defaults"""

    # Application paths
    BASE_DIR: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = BASE_DIR / 'logs'

    # Logging defaults
    LOG_LEVEL: str = 'INFO'
    LOG_FILE: Path = LOGS_DIR / 'eventstream.log'

    # Stream defaults
    FRAMING_POLICY: str = 'line'
    KEEPALIVE_INTERVAL: float = 30.0
    DEFAULT_INTERVAL: float = 1.0

    # Queue sink (producer thread -> response generator)
    SINK_QUEUE_SIZE: int = 256
    SINK_WRITE_TIMEOUT: float = 5.0

    # Demo server
    HOST: str = '127.0.0.1'
    PORT: int = 5000

    def __init__(self):
        """Initialize configuration"""
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load any environment variable overrides (optional)"""
        if os.getenv('EVENTSTREAM_LOG_LEVEL'):
            self.LOG_LEVEL = os.getenv('EVENTSTREAM_LOG_LEVEL').upper()
        if os.getenv('EVENTSTREAM_FRAMING_POLICY'):
            self.FRAMING_POLICY = os.getenv('EVENTSTREAM_FRAMING_POLICY')
        if os.getenv('EVENTSTREAM_KEEPALIVE_INTERVAL'):
            self.KEEPALIVE_INTERVAL = float(os.getenv('EVENTSTREAM_KEEPALIVE_INTERVAL'))
        if os.getenv('EVENTSTREAM_QUEUE_SIZE'):
            self.SINK_QUEUE_SIZE = int(os.getenv('EVENTSTREAM_QUEUE_SIZE'))
        if os.getenv('EVENTSTREAM_HOST'):
            self.HOST = os.getenv('EVENTSTREAM_HOST')
        if os.getenv('EVENTSTREAM_PORT'):
            self.PORT = int(os.getenv('EVENTSTREAM_PORT'))

    def framing_policy(self) -> FramingPolicy:
        """Configured framing policy as an enum member"""
        return FramingPolicy.from_name(self.FRAMING_POLICY)


# Global config instance
config = Config()
