"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.app.runtime.config.config_data import ConfigData
from src.app.runtime.config.settings import EnvironmentVariables


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    def replacer(match):
        var_expr = match.group(1)

        # Handle default values: ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        # Handle error messages: ${VAR:?message}
        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        # Handle required variables: ${VAR}
        else:
            var_name = var_expr
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name} not set")
            return value

    # Match ${...} patterns
    pattern = r'\$\{([^}]+)\}'
    return re.sub(pattern, replacer, text)


def apply_environment_overrides(
    config: ConfigData, env_vars: EnvironmentVariables
) -> ConfigData:
    """Apply explicitly set environment variables on top of the file configuration."""
    if env_vars.environment is not None:
        config.app.environment = env_vars.environment
    if env_vars.port is not None:
        config.app.port = env_vars.port
    if env_vars.database_url is not None:
        config.database.url = env_vars.database_url
    if env_vars.log_level is not None:
        config.logging.level = env_vars.log_level
    return config


def load_templated_yaml(
    file_path: Path, env_vars: EnvironmentVariables | None = None
) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file
        env_vars: Environment overrides; read from the process environment if omitted

    Returns:
        Parsed configuration with environment variables substituted and applied

    Raises:
        ValueError: If required environment variables are missing or the file is invalid
    """
    env_vars = env_vars or EnvironmentVariables()

    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return apply_environment_overrides(ConfigData(), env_vars)

    with open(file_path) as f:
        content = f.read()

    # Substitute environment variables
    substituted_content = substitute_env_vars(content)

    # Parse YAML
    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded or not isinstance(loaded, dict):
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    # Validate and return as ConfigData
    try:
        # Extract the 'config' section from the YAML structure
        config_data = loaded.get('config') or {}
        config = ConfigData.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    config = apply_environment_overrides(config, env_vars)
    logger.info("Loaded configuration for environment: {}", config.app.environment)
    return config
