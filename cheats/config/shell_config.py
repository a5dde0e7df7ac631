#!/usr/bin/env python3
"""
Configuration classes for the cheats shell.

Provides configuration management for the shell, its parser and logging.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import codecs
import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import toml
import yaml
from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Configuration for cheats logging."""

    level: str = Field(default="WARNING", description="Logging level")
    format: str = Field(default="text", description="Log format: json or text")
    output_file: Optional[str] = Field(default=None, description="Log output file path")
    max_file_size_mb: int = Field(default=10, ge=1, description="Maximum log file size in MB")
    backup_count: int = Field(default=3, ge=1, description="Number of backup log files to keep")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        valid_formats = {"json", "text"}
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()


class ParserConfig(BaseModel):
    """Configuration for the script lexer."""

    capture_comments: bool = Field(
        default=False, description="Emit comment tokens instead of skipping comments"
    )


class ShellConfig(BaseModel):
    """Main configuration class for the shell."""

    encoding: str = Field(default="utf-8", description="Encoding of script files and channels")
    record_events: bool = Field(
        default=False, description="Keep published shell events in memory"
    )
    max_recorded_events: Optional[int] = Field(
        default=1000,
        ge=1,
        description="Most recent events kept when recording, None keeps every event",
    )
    history_file: Optional[str] = Field(
        default=None, description="Readline history file for the interactive console"
    )
    history_size: int = Field(default=1000, ge=0, description="Interactive history length")

    parser: ParserConfig = Field(default_factory=ParserConfig, description="Parser configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v):
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "ShellConfig":
        """Load configuration from a JSON, YAML or TOML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        content = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()

        try:
            if suffix in [".yml", ".yaml"]:
                data = yaml.safe_load(content)
            elif suffix == ".toml":
                data = toml.loads(content)
            else:
                data = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError, toml.TomlDecodeError) as e:
            raise ValueError(f"Failed to parse configuration file: {e}")

        return cls(**(data or {}))

    @classmethod
    def from_env(cls, prefix: str = "CHEATS_") -> "ShellConfig":
        """Load configuration from environment variables.

        Values that are not set in the environment keep their model defaults.
        """
        return cls(**ConfigurationManager._get_env_overrides(prefix))

    def to_file(self, config_path: Union[str, Path], format: str = "auto") -> None:
        """Save configuration to a file."""
        path = Path(config_path)

        if format == "auto":
            suffix = path.suffix.lower()
            if suffix in [".yml", ".yaml"]:
                format = "yaml"
            elif suffix == ".toml":
                format = "toml"
            else:
                format = "json"

        data = self.model_dump(exclude_none=format == "toml")

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False, indent=2)
        elif format == "toml":
            content = toml.dumps(data)
        else:
            content = json.dumps(data, indent=2)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _to_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "on")


ENV_MAPPINGS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "ENCODING": ("encoding", str),
    "RECORD_EVENTS": ("record_events", _to_bool),
    "MAX_RECORDED_EVENTS": ("max_recorded_events", int),
    "HISTORY_FILE": ("history_file", str),
    "HISTORY_SIZE": ("history_size", int),
    "CAPTURE_COMMENTS": ("parser.capture_comments", _to_bool),
    "LOG_LEVEL": ("logging.level", str),
    "LOG_FORMAT": ("logging.format", str),
    "LOG_FILE": ("logging.output_file", str),
}


class ConfigurationManager:
    """Utility class for managing configurations."""

    @staticmethod
    def create_default_config_file(path: Union[str, Path], format: str = "auto") -> None:
        """Create a default configuration file."""
        ShellConfig().to_file(path, format)

    @staticmethod
    def merge_configs(*configs: ShellConfig) -> ShellConfig:
        """Merge multiple configurations, with later configs taking precedence.

        Only fields explicitly set on a later configuration override earlier ones.
        """
        if not configs:
            return ShellConfig()

        merged_data = configs[0].model_dump()

        for config in configs[1:]:
            config_data = config.model_dump(exclude_unset=True)
            merged_data = ConfigurationManager._deep_merge(merged_data, config_data)

        return ShellConfig(**merged_data)

    @staticmethod
    def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigurationManager._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def load_config(
        config_file: Optional[Union[str, Path]] = None,
        env_prefix: str = "CHEATS_",
        use_env: bool = True,
    ) -> ShellConfig:
        """Load configuration from file and/or environment variables."""
        if config_file:
            try:
                base_config = ShellConfig.from_file(config_file)
            except FileNotFoundError:
                base_config = ShellConfig()
        else:
            base_config = ShellConfig()

        if use_env:
            env_overrides = ConfigurationManager._get_env_overrides(env_prefix)
            if env_overrides:
                base_data = base_config.model_dump()
                merged_data = ConfigurationManager._deep_merge(base_data, env_overrides)
                return ShellConfig(**merged_data)

        return base_config

    @staticmethod
    def _get_env_overrides(prefix: str = "CHEATS_") -> Dict[str, Any]:
        """Get only the environment variable overrides that are actually set."""
        config_data: Dict[str, Any] = {}

        for suffix, (config_key, converter) in ENV_MAPPINGS.items():
            env_var = f"{prefix}{suffix}"
            value = os.getenv(env_var)
            if value is None:
                continue
            try:
                converted_value = converter(value)
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid value for {env_var}: {value} ({e})")

            parts: List[str] = config_key.split(".")
            current = config_data
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = converted_value

        return config_data
