"""
Configuration Management for StarQuery

🔧 Unified Configuration System:
This module provides configuration for query behaviour and logging,
with presets per environment and overrides from dictionaries or
environment variables.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict
from enum import Enum
from logging.handlers import RotatingFileHandler
import logging
import os


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class QueryConfig:
    """Query behaviour configuration"""
    fetch_on_observe: bool = True
    fetch_on_subscribe: bool = True
    log_fetch_errors: bool = True
    use_namespace: bool = True
    namespace: Optional[str] = None  # falls back to the query name


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class StarQueryConfig:
    """Complete library configuration"""
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    query: QueryConfig = field(default_factory=QueryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'StarQueryConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.debug = True
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.debug = False
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'StarQueryConfig':
        """Create configuration from dictionary, ignoring unknown keys"""
        if "environment" in config_dict:
            config = cls.for_environment(Environment(config_dict["environment"]))
        else:
            config = cls()

        if "debug" in config_dict:
            config.debug = bool(config_dict["debug"])

        if "query" in config_dict:
            for key, value in config_dict["query"].items():
                if hasattr(config.query, key):
                    setattr(config.query, key, value)

        if "logging" in config_dict:
            for key, value in config_dict["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        return config

    @classmethod
    def from_environment(cls) -> 'StarQueryConfig':
        """Create configuration from environment variables"""
        env_name = os.getenv('STARQUERY_ENV', 'development')
        config = cls.for_environment(Environment(env_name))

        if os.getenv('STARQUERY_DEBUG'):
            config.debug = os.getenv('STARQUERY_DEBUG').lower() == 'true'

        if os.getenv('STARQUERY_LOG_LEVEL'):
            config.logging.level = os.getenv('STARQUERY_LOG_LEVEL').upper()

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "query": asdict(self.query),
            "logging": asdict(self.logging),
        }


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """Apply a logging configuration to the ``starquery`` logger hierarchy"""
    config = config or get_config().logging
    logger = logging.getLogger("starquery")
    logger.setLevel(config.level.upper())

    formatter = logging.Formatter(config.format)
    if config.file_path:
        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    return logger


# Global configuration management
_current_config: Optional[StarQueryConfig] = None


def set_config(config: StarQueryConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> StarQueryConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        # Auto-create from environment if not set
        _current_config = StarQueryConfig.from_environment()

    return _current_config


def configure_from_dict(config_dict: Dict[str, Any]) -> StarQueryConfig:
    """Configure the library from dictionary"""
    config = StarQueryConfig.from_dict(config_dict)
    set_config(config)
    return config


__all__ = [
    "Environment", "QueryConfig", "LoggingConfig", "StarQueryConfig",
    "configure_logging", "set_config", "get_config", "configure_from_dict",
]
