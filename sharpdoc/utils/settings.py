"""Configuration loading for the sharpdoc command line.

Settings come from a JSON file laid out like an ``appsettings.json``::

    {
      "Anthropic": {
        "ApiKey": "sk-ant-...",
        "Endpoint": "https://api.anthropic.com",
        "Model": "claude-sonnet-4-20250514"
      },
      "InputFile": "input.cs",
      "OutputFile": "output.cs",
      "MaxConcurrency": 3,
      "TimeoutSeconds": null,
      "FailurePolicy": "drop",
      "Tone": "concise"
    }

``ANTHROPIC_API_KEY`` and ``ANTHROPIC_BASE_URL`` override the file.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..claude.prompt_builder import PromptBuilder
from ..generation.coordinator import FAILURE_POLICIES

DEFAULT_CONFIG_FILE = "sharpdoc.json"

PLACEHOLDER_VALUES = {"", "YOUR_KEY_HERE", "YOUR_ENDPOINT_HERE"}


@dataclass
class Settings:
    """Resolved configuration for a generate run.

    Attributes:
        api_key: Anthropic API key.
        endpoint: Anthropic API base URL.
        model: Claude model used for generation.
        input_file: C# file to document.
        output_file: Where the documented source is written.
        max_concurrency: Maximum generation requests in flight.
        timeout: Overall generation time limit in seconds, or None.
        failure_policy: 'drop' or 'fallback'.
        tone: Prompt tone ('concise', 'detailed', 'friendly').
    """

    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    model: str = "claude-sonnet-4-20250514"
    input_file: str = "input.cs"
    output_file: str = "output.cs"
    max_concurrency: int = 3
    timeout: Optional[float] = None
    failure_policy: str = "drop"
    tone: str = "concise"

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create settings from the JSON configuration layout.

        Raises:
            ValueError: If a section or numeric value has the wrong type.
        """
        anthropic_section = data.get("Anthropic") or {}
        if not isinstance(anthropic_section, dict):
            raise ValueError("Invalid configuration: Anthropic must be an object")
        defaults = cls()
        max_concurrency = _coerce(data, "MaxConcurrency", int, "an integer")
        timeout = _coerce(data, "TimeoutSeconds", float, "a number")
        return cls(
            api_key=anthropic_section.get("ApiKey"),
            endpoint=anthropic_section.get("Endpoint"),
            model=anthropic_section.get("Model") or defaults.model,
            input_file=data.get("InputFile") or defaults.input_file,
            output_file=data.get("OutputFile") or defaults.output_file,
            max_concurrency=(
                defaults.max_concurrency if max_concurrency is None else max_concurrency
            ),
            timeout=timeout,
            failure_policy=data.get("FailurePolicy") or defaults.failure_policy,
            tone=data.get("Tone") or defaults.tone,
        )

    def validate(self) -> None:
        """Check that the settings are complete enough to run.

        Raises:
            ValueError: If the credential or endpoint is missing or left as a
                placeholder, or if a numeric or policy value is invalid.
        """
        problems = []
        if _is_placeholder(self.api_key):
            problems.append("Anthropic:ApiKey is missing or a placeholder")
        if _is_placeholder(self.endpoint):
            problems.append("Anthropic:Endpoint is missing or a placeholder")
        if _is_placeholder(self.model):
            problems.append("Anthropic:Model is missing or a placeholder")
        if self.max_concurrency < 1:
            problems.append(f"MaxConcurrency must be at least 1, got {self.max_concurrency}")
        if self.timeout is not None and self.timeout <= 0:
            problems.append(f"TimeoutSeconds must be positive, got {self.timeout}")
        if self.failure_policy not in FAILURE_POLICIES:
            problems.append(
                f"FailurePolicy must be one of {', '.join(FAILURE_POLICIES)}, "
                f"got {self.failure_policy}"
            )
        if self.tone not in PromptBuilder.TONE_DESCRIPTIONS:
            problems.append(
                f"Tone must be one of {', '.join(PromptBuilder.TONE_DESCRIPTIONS)}, "
                f"got {self.tone}"
            )

        if problems:
            raise ValueError(
                "Invalid configuration: " + "; ".join(problems) + ". "
                "Set Anthropic:ApiKey, Anthropic:Endpoint and Anthropic:Model in "
                f"{DEFAULT_CONFIG_FILE} or via ANTHROPIC_API_KEY / ANTHROPIC_BASE_URL"
            )


def _coerce(data: dict, key: str, convert, description: str):
    """Convert ``data[key]`` with ``convert``; a missing or null value gives None."""
    value = data.get(key)
    if value is None:
        return None
    try:
        if isinstance(value, bool):
            raise TypeError(f"{key} is a boolean")
        return convert(value)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"Invalid configuration: {key} must be {description}, got {value!r}"
        ) from e


def _is_placeholder(value: Optional[str]) -> bool:
    return value is None or value.strip() in PLACEHOLDER_VALUES


def load_settings(
    config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """Load settings from a JSON file and the environment.

    A missing file is not an error: defaults and environment variables are
    used instead, and ``Settings.validate`` reports what is missing.

    Args:
        config_path: Path to the JSON file. Defaults to sharpdoc.json in the
            current directory.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Settings with environment overrides applied.

    Raises:
        ValueError: If the file exists but is not valid JSON.
    """
    environ = os.environ if environ is None else environ
    path = Path(config_path or DEFAULT_CONFIG_FILE)

    data: dict = {}
    if path.is_file():
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a JSON object")

    settings = Settings.from_dict(data)
    if environ.get("ANTHROPIC_API_KEY"):
        settings.api_key = environ["ANTHROPIC_API_KEY"]
    if environ.get("ANTHROPIC_BASE_URL"):
        settings.endpoint = environ["ANTHROPIC_BASE_URL"]
    return settings
