# sentiment_proxy/config.py
import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration."""
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash-lite')
    GEMINI_API_BASE = os.environ.get('GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta')
    GEMINI_TEMPERATURE = float(os.environ.get('GEMINI_TEMPERATURE', '0.1'))
    GEMINI_MAX_OUTPUT_TOKENS = int(os.environ.get('GEMINI_MAX_OUTPUT_TOKENS', '2048'))
    UPSTREAM_TIMEOUT = float(os.environ.get('UPSTREAM_TIMEOUT', '30'))
    MAX_TEXT_LENGTH = int(os.environ.get('MAX_TEXT_LENGTH', '100'))
    STRICT_OUTPUT_SCHEMA = _env_flag('STRICT_OUTPUT_SCHEMA')
    DEBUG = False
    TESTING = False


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""


class TestingConfig(Config):
    """Testing configuration. Never picks up a real key from the environment."""
    TESTING = True
    GEMINI_API_KEY = None
    STRICT_OUTPUT_SCHEMA = False


config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


@dataclass(frozen=True)
class ProxySettings:
    """Immutable view of the settings the analysis service needs."""
    api_key: Optional[str]
    model: str
    api_base: str
    temperature: float
    max_output_tokens: int
    timeout: float
    max_text_length: int
    strict_output_schema: bool

    @classmethod
    def from_mapping(cls, config) -> 'ProxySettings':
        """Build settings from a Flask config (or any mapping with the same keys)."""
        return cls(
            api_key=config.get('GEMINI_API_KEY') or None,
            model=config['GEMINI_MODEL'],
            api_base=config['GEMINI_API_BASE'].rstrip('/'),
            temperature=float(config['GEMINI_TEMPERATURE']),
            max_output_tokens=int(config['GEMINI_MAX_OUTPUT_TOKENS']),
            timeout=float(config['UPSTREAM_TIMEOUT']),
            max_text_length=int(config['MAX_TEXT_LENGTH']),
            strict_output_schema=bool(config['STRICT_OUTPUT_SCHEMA']),
        )

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"
