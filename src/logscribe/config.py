"""Flat JSON configuration store for logscribe."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
REQUIRED_FIELDS = ("apiEndpoint", "apiPort", "apiPath", "model", "systemPrompt")

DEFAULT_SYSTEM_PROMPT = (
    "You are an experienced IT service desk analyst. You review application and "
    "system logs, identify errors, warnings and unusual patterns, explain their "
    "likely root causes in plain language, and recommend practical next steps "
    "for the support team."
)


# ╭──────────────────────────────────────────────────────────────╮
# │ Locations                                                    │
# ╰──────────────────────────────────────────────────────────────╯


@dataclass(frozen=True)
class AppPaths:
    """Folders and files the tool works with, resolved from one base directory."""

    base_dir: Path

    @classmethod
    def from_base(cls, base_dir: Path | str) -> "AppPaths":
        return cls(base_dir=Path(base_dir))

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    @property
    def reports_dir(self) -> Path:
        return self.base_dir / "reports"

    @property
    def prompts_dir(self) -> Path:
        return self.base_dir / "prompts"

    @property
    def config_file(self) -> Path:
        return self.base_dir / CONFIG_FILE_NAME


# ╭──────────────────────────────────────────────────────────────╮
# │ Configuration model                                          │
# ╰──────────────────────────────────────────────────────────────╯


class Configuration(BaseModel):
    """Settings used to reach the local language model API."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    api_endpoint: str = Field(alias="apiEndpoint")
    api_port: int = Field(alias="apiPort")
    api_path: str = Field(alias="apiPath")
    model: str
    temperature: float = 0.7
    max_tokens: int = Field(default=2000, alias="maxTokens")
    timeout_seconds: int = Field(default=30, alias="timeoutSeconds")
    system_prompt: str = Field(alias="systemPrompt")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def connection_problems(self) -> list[str]:
        """Return human readable reasons why the settings cannot be used."""

        problems: list[str] = []
        if not self.api_endpoint.strip():
            problems.append("apiEndpoint is empty.")
        if not self.api_path.strip():
            problems.append("apiPath is empty.")
        if not 1 <= self.api_port <= 65535:
            problems.append(f"apiPort must be between 1 and 65535 (got {self.api_port}).")
        if not 0.0 <= self.temperature <= 1.0:
            problems.append(f"temperature must be between 0.0 and 1.0 (got {self.temperature}).")
        if self.max_tokens <= 0:
            problems.append(f"maxTokens must be greater than zero (got {self.max_tokens}).")
        if self.timeout_seconds <= 0:
            problems.append(f"timeoutSeconds must be greater than zero (got {self.timeout_seconds}).")
        return problems


def default_configuration() -> Configuration:
    return Configuration(
        api_endpoint="http://localhost",
        api_port=11434,
        api_path="/v1/chat/completions",
        model="llama3.2",
        temperature=0.7,
        max_tokens=2000,
        timeout_seconds=30,
        system_prompt=DEFAULT_SYSTEM_PROMPT,
    )


# ╭──────────────────────────────────────────────────────────────╮
# │ Store operations                                             │
# ╰──────────────────────────────────────────────────────────────╯


def configuration_exists(config_path: Path | str) -> bool:
    """Return ``True`` when *config_path* exists and holds valid JSON."""

    path = Path(config_path)
    if not path.is_file():
        return False
    try:
        json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return False
    return True


def initialize_default_configuration(config_path: Path | str) -> bool:
    """Write the default configuration unless a file is already present."""

    path = Path(config_path)
    if path.exists():
        logger.debug("Configuration already present at %s; leaving it untouched", path)
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_json(path, default_configuration().to_json_dict())
    except OSError as exc:
        logger.error("Could not create default configuration at %s: %s", path, exc)
        return False

    logger.info("Created default configuration at %s", path)
    return True


def load_configuration(config_path: Path | str) -> Optional[Configuration]:
    """Load and validate the configuration file.

    Returns ``None`` if the file is missing, unreadable, not a JSON object,
    or lacks one of :data:`REQUIRED_FIELDS`.
    """

    path = Path(config_path)
    if not path.is_file():
        logger.error("Configuration file not found: %s", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read configuration %s: %s", path, exc)
        return None
    except json.JSONDecodeError as exc:
        logger.error("Configuration %s is not valid JSON: %s", path, exc)
        return None

    if not isinstance(data, dict):
        logger.error("Configuration %s must contain a JSON object", path)
        return None

    missing = _missing_fields(data)
    if missing:
        logger.error("Configuration %s is missing required fields: %s", path, ", ".join(missing))
        return None

    try:
        return Configuration.model_validate(data)
    except ValidationError as exc:
        logger.error("Configuration %s has invalid values: %s", path, exc)
        return None


def save_configuration(config: Configuration | Mapping[str, Any], config_path: Path | str) -> bool:
    """Persist *config*; nothing is written unless every required field is present."""

    path = Path(config_path)
    if isinstance(config, Configuration):
        data = config.to_json_dict()
    else:
        missing = _missing_fields(config)
        if missing:
            logger.error("Refusing to save configuration without: %s", ", ".join(missing))
            return False
        try:
            data = Configuration.model_validate(dict(config)).to_json_dict()
        except ValidationError as exc:
            logger.error("Refusing to save invalid configuration: %s", exc)
            return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_json(path, data)
    except OSError as exc:
        logger.error("Could not save configuration to %s: %s", path, exc)
        return False
    return True


def _missing_fields(data: Mapping[str, Any]) -> list[str]:
    return [name for name in REQUIRED_FIELDS if name not in data]


def _write_json(path: Path, data: Mapping[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
