"""
Configuration management for the Exchange Adapter

Loads transport, signer, transaction and logging settings from environment
variables and .env file. Contract addresses are not part of the global config:
they live in an ExchangeConfig that is passed explicitly to the client.
"""

import os
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, List

from dotenv import load_dotenv

from .errors import ConfigurationError


def _load_env_file():
    """Load .env file from project root"""
    current = Path(__file__).parent.parent  # exchange_adapter package parent
    env_file = current / ".env"

    if env_file.exists():
        load_dotenv(env_file)


# Load .env on module import
_load_env_file()


def _get_env(key: str, default: Optional[str] = "") -> Optional[str]:
    """Get environment variable with default"""
    value = os.getenv(key)
    if value is None:
        return default
    return value


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float"""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid float value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    """Get environment variable as int"""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"Invalid int value for {key}='{value}', using default={default}"
        )
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as bool"""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class RpcConfig:
    """EVM RPC configuration"""
    url: str = field(default_factory=lambda: _get_env("ETH_RPC_URL", ""))
    # None means detect from the node
    chain_id: Optional[int] = field(default_factory=lambda: _get_env_int("EVM_CHAIN_ID", None))
    timeout_seconds: float = field(default_factory=lambda: _get_env_float("RPC_TIMEOUT_SECONDS", 30.0))


@dataclass
class SignerConfig:
    """Local signer configuration"""
    # Name of the environment variable that holds the hex private key
    private_key_env: str = field(default_factory=lambda: _get_env("EVM_PRIVATE_KEY_ENV", "EVM_PRIVATE_KEY"))
    keystore_path: str = field(default_factory=lambda: _get_env("EVM_KEYSTORE_PATH", ""))


@dataclass
class TxConfig:
    """Transaction confirmation settings"""
    confirmation_timeout: float = field(default_factory=lambda: _get_env_float("TX_CONFIRMATION_TIMEOUT", 120.0))
    poll_latency: float = field(default_factory=lambda: _get_env_float("TX_POLL_LATENCY", 0.1))


@dataclass(frozen=True)
class ExchangeConfig:
    """
    Addresses of the deployed Exchange and Token contracts

    Passed explicitly to ExchangeClient / ExchangeAdapter.

    Usage:
        exchange = ExchangeConfig(
            exchange_address="0x...",
            token_address="0x...",
        ).validate()

        # Or from EXCHANGE_CONTRACT_ADDRESS / TOKEN_CONTRACT_ADDRESS
        exchange = ExchangeConfig.from_env()
    """
    exchange_address: str
    token_address: str

    def validate(self) -> "ExchangeConfig":
        """
        Check both addresses and return a checksummed copy

        Raises:
            ConfigurationError: If an address is missing or malformed
        """
        from web3 import Web3

        checked = {}
        for name in ("exchange_address", "token_address"):
            value = getattr(self, name)
            if not value:
                raise ConfigurationError.missing(name)
            if not Web3.is_address(value):
                raise ConfigurationError.invalid(name, f"not an EVM address: {value}")
            checked[name] = Web3.to_checksum_address(value)
        return replace(self, **checked)

    @classmethod
    def from_env(cls) -> "ExchangeConfig":
        return cls(
            exchange_address=_get_env("EXCHANGE_CONTRACT_ADDRESS", ""),
            token_address=_get_env("TOKEN_CONTRACT_ADDRESS", ""),
        ).validate()


def _get_default_log_path() -> str:
    """Get default log file path under exchange_adapter/log/ with UTC timestamp"""
    from datetime import datetime, timezone
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_dir = Path(__file__).parent / "log"
    return str(log_dir / f"exchange_adapter_{timestamp}.log")


@dataclass
class LoggingConfig:
    """
    Logging configuration with file output and correlation ID support.

    Environment variables:
        LOG_FILE: Path to log file (overrides default, empty disables file output)
        LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
        LOG_FORMAT: Custom log format string
        LOG_CONSOLE: Enable console output (default: true)
        LOG_MAX_BYTES: Max log file size before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup files to keep (default: 5)
    """
    log_file: str = field(default_factory=lambda: _get_env("LOG_FILE", _get_default_log_path()))
    log_level: str = field(default_factory=lambda: _get_env("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _get_env(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    console_output: bool = field(default_factory=lambda: _get_env_bool("LOG_CONSOLE", True))
    max_bytes: int = field(default_factory=lambda: _get_env_int("LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB
    backup_count: int = field(default_factory=lambda: _get_env_int("LOG_BACKUP_COUNT", 5))

    @property
    def level(self) -> int:
        """Get numeric log level"""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@dataclass
class Config:
    """
    Main configuration container

    Usage:
        from exchange_adapter.config import config

        print(config.rpc.url)
        print(config.tx.confirmation_timeout)
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    tx: TxConfig = field(default_factory=TxConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Reload configuration from environment"""
        _load_env_file()
        return cls()


# Global config instance
config = Config()


def get_config() -> Config:
    """Get global configuration instance"""
    return config


def reload_config() -> Config:
    """Reload and return new configuration"""
    global config
    config = Config.reload()
    return config


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "exchange_adapter",
) -> logging.Logger:
    """
    Set up logging based on configuration.

    Creates handlers for file and/or console output with rotation.
    The log file directory is created automatically if it doesn't exist.

    Args:
        log_config: Logging configuration (uses global config if None)
        logger_name: Name of the logger to configure

    Returns:
        Configured logger instance
    """
    if log_config is None:
        log_config = config.logging

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)

    # Close before removing to flush buffers and release file handles
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(log_config.log_format)

    handlers: List[logging.Handler] = []

    if log_config.log_file:
        from logging.handlers import RotatingFileHandler

        log_path = Path(log_config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_config.log_file,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding='utf-8',
        )
        file_handler.setLevel(log_config.level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if log_config.console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_config.level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    for handler in handlers:
        logger.addHandler(handler)

    # Child loggers inherit handlers from parent
    for name in [
        f"{logger_name}.infra",
        f"{logger_name}.modules",
        f"{logger_name}.protocols",
    ]:
        logging.getLogger(name).setLevel(log_config.level)

    if log_config.log_file:
        logger.info(f"Logging initialized: file={log_config.log_file}, level={log_config.log_level}")

    return logger


def enable_file_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """
    Quick setup for file logging.

    Example:
        from exchange_adapter.config import enable_file_logging

        logger = enable_file_logging(log_file="exchange.log", level="DEBUG")
    """
    if log_file is None:
        # Use the global config's log_file to keep consistent timestamp
        log_file = config.logging.log_file

    log_config = LoggingConfig(
        log_file=log_file,
        log_level=level,
        console_output=console,
    )
    return setup_logging(log_config)
