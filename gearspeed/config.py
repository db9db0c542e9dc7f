import logging
import os

from dotenv import load_dotenv


def load_config():
    """Load environment variables from .env file"""
    load_dotenv()


class Config:
    HOST = os.getenv("GEARSPEED_HOST", "0.0.0.0")
    PORT = os.getenv("GEARSPEED_PORT", "8080")
    LOG_LEVEL = os.getenv("GEARSPEED_LOG_LEVEL", "INFO").upper()

    @classmethod
    def refresh(cls):
        """Re-read settings after load_config() has populated the environment"""
        cls.HOST = os.getenv("GEARSPEED_HOST", "0.0.0.0")
        cls.PORT = os.getenv("GEARSPEED_PORT", "8080")
        cls.LOG_LEVEL = os.getenv("GEARSPEED_LOG_LEVEL", "INFO").upper()

    @classmethod
    def port(cls):
        return int(cls.PORT)

    @classmethod
    def log_level(cls):
        return logging.getLevelName(cls.LOG_LEVEL)

    @classmethod
    def validate(cls):
        try:
            port = int(cls.PORT)
        except (TypeError, ValueError):
            raise ValueError(f"GEARSPEED_PORT must be a number, got '{cls.PORT}'")
        if not 0 < port < 65536:
            raise ValueError(f"GEARSPEED_PORT out of range: {port}")
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            raise ValueError(f"Unknown GEARSPEED_LOG_LEVEL: '{cls.LOG_LEVEL}'")
