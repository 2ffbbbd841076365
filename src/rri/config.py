"""
Configuration for the RRI codec.

Defines the protocol version the client speaks, the wire format it uses and
how it logs, together with helpers to load and save that configuration from
JSON files or the environment.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .enums import ErrorCode, LogLevel, QueryFormat
from .exceptions import ConfigError
from .tokens import Version


# Latest RRI version supported by this client
LATEST_VERSION = Version("5.0")

OUTPUT_FORMATS = ("json", "text", "both")


@dataclass
class ProtocolConfig:
    """Protocol settings threaded into every query constructor."""

    version: str = LATEST_VERSION
    query_format: str = QueryFormat.KV.value


@dataclass
class LoggingConfig:
    """Logging and audit configuration."""

    level: str = "info"
    audit_mode: bool = False
    audit_signing_key: Optional[str] = None
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class CodecConfig:
    """Main configuration combining all sub-configurations."""

    protocol: ProtocolConfig = field(default_factory=ProtocolConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def create_default_config() -> CodecConfig:
    """Create a configuration speaking the latest protocol version."""
    return CodecConfig(
        protocol=ProtocolConfig(version=LATEST_VERSION),
        logging=LoggingConfig(level="info", output_format="text"),
    )


def validate_config(config: CodecConfig) -> None:
    """
    Validate a configuration.

    Raises:
        ConfigError: If any setting has an unsupported value
    """
    problems: list[str] = []

    if not config.protocol.version:
        problems.append("protocol.version must not be empty")

    if config.protocol.query_format not in {f.value for f in QueryFormat}:
        problems.append(f"unsupported protocol.query_format {config.protocol.query_format!r}")

    if config.logging.level not in {level.value for level in LogLevel}:
        problems.append(f"unsupported logging.level {config.logging.level!r}")

    if config.logging.output_format not in OUTPUT_FORMATS:
        problems.append(f"unsupported logging.output_format {config.logging.output_format!r}")

    if config.logging.audit_mode and not config.logging.audit_signing_key:
        problems.append("logging.audit_mode requires logging.audit_signing_key")

    if problems:
        raise ConfigError(
            code=ErrorCode.INVALID_CONFIG.value,
            message="; ".join(problems),
            details={"problems": problems},
        )


def config_from_dict(data: dict) -> CodecConfig:
    """
    Build a configuration from a dictionary as stored in a JSON file.

    Missing keys fall back to defaults.

    Raises:
        ConfigError: If the resulting configuration is invalid
    """
    protocol_data = data.get("protocol", {})
    protocol = ProtocolConfig(
        version=Version(protocol_data.get("version", LATEST_VERSION)),
        query_format=protocol_data.get("query_format", QueryFormat.KV.value),
    )

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "info"),
        audit_mode=logging_data.get("audit_mode", False),
        audit_signing_key=logging_data.get("audit_signing_key"),
        output_format=logging_data.get("output_format", "text"),
    )

    config = CodecConfig(protocol=protocol, logging=logging_config)
    validate_config(config)
    return config


def config_to_dict(config: CodecConfig) -> dict:
    return {
        "protocol": {
            "version": str(config.protocol.version),
            "query_format": config.protocol.query_format,
        },
        "logging": {
            "level": config.logging.level,
            "audit_mode": config.logging.audit_mode,
            "audit_signing_key": config.logging.audit_signing_key,
            "output_format": config.logging.output_format,
        },
    }


def load_config_from_file(config_path: Path) -> Optional[CodecConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        CodecConfig if the file exists, None otherwise

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid settings
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except json.JSONDecodeError as e:
        raise ConfigError(
            code=ErrorCode.INVALID_CONFIG.value,
            message=f"config file is not valid JSON: {e}",
            details={"path": str(config_path)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            code=ErrorCode.INVALID_CONFIG.value,
            message="config file must contain a JSON object",
            details={"path": str(config_path)},
        )

    return config_from_dict(data)


def save_config_to_file(config: CodecConfig, config_path: Path) -> None:
    """
    Save configuration to a JSON file, creating parent directories.

    Args:
        config: CodecConfig to save
        config_path: Path to save the configuration
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)


def load_config_from_env(env_file: Optional[Path] = None) -> CodecConfig:
    """
    Load configuration from environment variables.

    An optional ``.env`` file is read first; variables already set in the
    environment take precedence. Recognised variables: RRI_VERSION,
    RRI_QUERY_FORMAT, RRI_LOG_LEVEL, RRI_LOG_FORMAT, RRI_AUDIT_SIGNING_KEY.

    Args:
        env_file: Optional path to a dotenv file

    Returns:
        CodecConfig built from the environment

    Raises:
        ConfigError: If the resulting configuration is invalid
    """
    load_dotenv(dotenv_path=env_file)

    signing_key = os.getenv("RRI_AUDIT_SIGNING_KEY", "").strip() or None
    config = CodecConfig(
        protocol=ProtocolConfig(
            version=Version(os.getenv("RRI_VERSION", LATEST_VERSION).strip()),
            query_format=os.getenv("RRI_QUERY_FORMAT", QueryFormat.KV.value).strip().lower(),
        ),
        logging=LoggingConfig(
            level=os.getenv("RRI_LOG_LEVEL", "info").strip().lower(),
            audit_mode=signing_key is not None,
            audit_signing_key=signing_key,
            output_format=os.getenv("RRI_LOG_FORMAT", "text").strip().lower(),
        ),
    )
    validate_config(config)
    return config
