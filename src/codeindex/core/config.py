"""Configuration system for codeindex using Pydantic."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from codeindex.index.dependency_resolver import DEFAULT_ALIASES, DEFAULT_EXTENSIONS
from codeindex.index.schema import FILE_TYPES

# Glob → file type.  Order matters: the first matching rule wins.
DEFAULT_FILE_TYPE_MAPPING: dict[str, str] = {
    # Next.js App Router
    "app/**/page.tsx": "route",
    "app/**/page.ts": "route",
    "app/**/layout.tsx": "route",
    "app/**/layout.ts": "route",
    "app/**/route.tsx": "api",
    "app/**/route.ts": "api",
    "app/api/**/*.ts": "api",
    "app/api/**/*.tsx": "api",
    # Pages Router
    "pages/**/*.tsx": "route",
    "pages/**/*.ts": "route",
    "pages/api/**/*.ts": "api",
    # Components
    "components/**/*.tsx": "component",
    "components/**/*.ts": "component",
    "src/components/**/*.tsx": "component",
    "src/components/**/*.ts": "component",
    # Hooks
    "hooks/**/*.ts": "hook",
    "hooks/**/*.tsx": "hook",
    "src/hooks/**/*.ts": "hook",
    "src/hooks/**/*.tsx": "hook",
    # Services
    "services/**/*.ts": "service",
    "src/services/**/*.ts": "service",
    # Utilities
    "lib/**/*.ts": "utility",
    "src/lib/**/*.ts": "utility",
    "utils/**/*.ts": "utility",
    "src/utils/**/*.ts": "utility",
    # Database
    "supabase/migrations/*.sql": "table",
    "prisma/migrations/**/*.sql": "table",
}

DEFAULT_INCLUDE_PATTERNS: list[str] = [
    "app/**/*.{ts,tsx}",
    "pages/**/*.{ts,tsx}",
    "components/**/*.{ts,tsx}",
    "hooks/**/*.{ts,tsx}",
    "services/**/*.ts",
    "lib/**/*.ts",
    "utils/**/*.ts",
    "src/**/*.{ts,tsx}",
    "supabase/migrations/*.sql",
]

DEFAULT_EXCLUDE_PATTERNS: list[str] = [
    "**/node_modules/**",
    "**/.next/**",
    "**/dist/**",
    "**/*.test.{ts,tsx}",
    "**/*.spec.{ts,tsx}",
    "**/__tests__/**",
    "**/*.d.ts",
    "**/coverage/**",
]

MODES = ("production", "development")


class ConfigError(ValueError):
    """Raised when a configuration fails validation.  Fatal for a run."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid configuration: " + "; ".join(self.errors))


class OutputConfig(BaseModel):
    """Where the JSON result file goes."""

    enabled: bool = True
    path: str = "project-metadata.json"


class IndexerConfig(BaseModel):
    """Root configuration model."""

    project_id: str = "default"
    include: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    file_type_mapping: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_FILE_TYPE_MAPPING)
    )
    aliases: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ALIASES))
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    # English keyword → Korean search terms; wins over the built-in map
    korean_keywords: dict[str, list[str]] = Field(default_factory=dict)
    output: OutputConfig = Field(default_factory=OutputConfig)
    mode: str = "production"
    verbose: bool = False
    max_workers: int = 4


class EnvSettings(BaseSettings):
    """Environment variable overrides."""

    model_config = SettingsConfigDict(
        env_prefix="CODEINDEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_id: str | None = None
    max_workers: int | None = None
    log_level: str = "INFO"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, override wins on conflicts."""
    result = {**base}
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load a YAML config file, return empty dict if not found."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _resolve_env_vars(value: Any) -> Any:
    """Recursively replace ${ENV_VAR} references with actual env values.

    If an env var is not set, the placeholder is preserved as-is.
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{(\w+)\}")
        return pattern.sub(
            lambda m: os.environ.get(m.group(1), m.group(0)),
            value,
        )
    if isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    return value


def create_default_config(overrides: Mapping[str, Any] | None = None) -> IndexerConfig:
    """Build a config from the defaults with *overrides* merged on top.

    Mappings (``file_type_mapping``, ``aliases``, ``output`` ...) are merged
    key by key; lists such as ``include`` replace the default outright.
    """
    merged = _deep_merge(IndexerConfig().model_dump(), dict(overrides or {}))
    return IndexerConfig(**merged)


def load_config(project_dir: Path | None = None) -> IndexerConfig:
    """Load configuration with layered precedence.

    Order (later overrides earlier):
    1. Built-in defaults (Pydantic defaults)
    2. ~/.codeindex/config.yaml (global user config)
    3. <project>/.codeindex/config.yaml (project-level config)
    4. Environment variables
    """
    global_config_dir = Path.home() / ".codeindex"
    project_config_dir = (project_dir or Path.cwd()) / ".codeindex"

    merged: dict[str, Any] = {}
    for config_path in [
        global_config_dir / "config.yaml",
        project_config_dir / "config.yaml",
    ]:
        layer = load_yaml_config(config_path)
        merged = _deep_merge(merged, layer)

    config = create_default_config(_resolve_env_vars(merged))

    env = EnvSettings()
    updates: dict[str, Any] = {}
    if env.project_id:
        updates["project_id"] = env.project_id
    if env.max_workers is not None:
        updates["max_workers"] = env.max_workers
    if updates:
        config = config.model_copy(update=updates)

    return config


def validate_config(config: IndexerConfig) -> list[str]:
    """Return a list of problems with *config*; empty means valid."""
    errors: list[str] = []

    if not config.project_id:
        errors.append("projectId is required")

    if not config.include:
        errors.append("At least one include pattern is required")

    for ext in config.extensions:
        if not ext.startswith("."):
            errors.append(f"Extension '{ext}' must start with '.'")

    for pattern, file_type in config.file_type_mapping.items():
        if file_type not in FILE_TYPES:
            errors.append(f"Unknown file type '{file_type}' for pattern '{pattern}'")

    if config.mode not in MODES:
        errors.append(f"mode must be one of {', '.join(MODES)}")

    if config.max_workers < 1:
        errors.append("max_workers must be at least 1")

    if config.output.enabled and not config.output.path:
        errors.append("Output path is required when file output is enabled")

    return errors


def ensure_valid(config: IndexerConfig) -> IndexerConfig:
    """Raise ``ConfigError`` unless *config* validates cleanly."""
    errors = validate_config(config)
    if errors:
        raise ConfigError(errors)
    return config
