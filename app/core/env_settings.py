# app/core/env_settings.py
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_path() -> Path:
    try:
        BASE_DIR = Path(__file__).resolve().parents[2]
        ENV_PATH = BASE_DIR / 'secrets' / 'app.env'
        if not ENV_PATH.exists():
            # Fallback to common Docker environment paths
            ENV_PATH = Path('/app/secrets/app.env')
            if not ENV_PATH.exists():
                ENV_PATH = Path('/app/app.env')
    except (NameError, ValueError):
        ENV_PATH = Path('/app/app.env')
    return ENV_PATH


class EnvSettings(BaseSettings):
    APP_NAME: str = 'HLK-SW16 Relay API'

    # Relay board
    HLK_SW16_HOST: str = '192.168.0.200'
    HLK_SW16_PORT: int = 8080
    HLK_SW16_TIMEOUT: float = 5.0

    # Status polling
    STATUS_RETRIES: int = 10
    STATUS_RETRY_DELAY: float = 0.001

    # Notifier (message bus publish endpoint); unset disables notifications
    MQTT_SENDER_HOST: Optional[str] = None
    MQTT_TOPIC: str = 'home/sensors/relay'
    MQTT_MEASUREMENT: str = 'relay'
    NOTIFIER_TIMEOUT: float = 5.0
    NOTIFIER_STRICT: bool = False

    # Server
    LOG_LEVEL: str = 'INFO'
    HOST: str = '0.0.0.0'
    PORT: int = 8080

    model_config = SettingsConfigDict(
        env_file=str(get_env_path()),
        env_file_encoding='utf-8',
        extra='ignore',
        validate_assignment=True,
    )

    @property
    def notifications_enabled(self) -> bool:
        """True when a publish endpoint has been configured."""
        return bool(self.MQTT_SENDER_HOST)


@lru_cache
def get_settings() -> EnvSettings:
    """Load the settings once per process."""
    return EnvSettings()
