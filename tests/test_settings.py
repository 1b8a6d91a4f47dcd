"""Tests for configuration loading and validation."""

import json
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sharpdoc.utils.settings import Settings, load_settings


@pytest.fixture
def valid_config():
    return {
        "Anthropic": {
            "ApiKey": "sk-ant-file",
            "Endpoint": "https://api.anthropic.com",
            "Model": "claude-sonnet-4-20250514",
        },
        "InputFile": "src/Service.cs",
        "OutputFile": "out/Service.cs",
        "MaxConcurrency": 5,
        "TimeoutSeconds": 90,
        "FailurePolicy": "fallback",
        "Tone": "detailed",
    }


def write_config(tmp_path, data):
    path = tmp_path / "sharpdoc.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestLoadSettings:
    """Test reading settings from file and environment."""

    def test_reads_every_key(self, tmp_path, valid_config):
        settings = load_settings(write_config(tmp_path, valid_config), environ={})

        assert settings.api_key == "sk-ant-file"
        assert settings.endpoint == "https://api.anthropic.com"
        assert settings.model == "claude-sonnet-4-20250514"
        assert settings.input_file == "src/Service.cs"
        assert settings.output_file == "out/Service.cs"
        assert settings.max_concurrency == 5
        assert settings.timeout == 90.0
        assert settings.failure_policy == "fallback"
        assert settings.tone == "detailed"
        settings.validate()

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(str(tmp_path / "absent.json"), environ={})

        assert settings == Settings()
        assert settings.input_file == "input.cs"
        assert settings.output_file == "output.cs"
        assert settings.max_concurrency == 3
        assert settings.timeout is None

    def test_environment_overrides_file(self, tmp_path, valid_config):
        environ = {
            "ANTHROPIC_API_KEY": "sk-ant-env",
            "ANTHROPIC_BASE_URL": "https://proxy.example",
        }
        settings = load_settings(write_config(tmp_path, valid_config), environ=environ)

        assert settings.api_key == "sk-ant-env"
        assert settings.endpoint == "https://proxy.example"

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "sharpdoc.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_settings(str(path), environ={})

    def test_non_object_raises(self, tmp_path):
        with pytest.raises(ValueError, match="JSON object"):
            load_settings(write_config(tmp_path, ["a"]), environ={})


class TestValidate:
    """Test settings validation."""

    def test_placeholders_rejected(self):
        settings = Settings(api_key="YOUR_KEY_HERE", endpoint="YOUR_ENDPOINT_HERE")

        with pytest.raises(ValueError) as exc_info:
            settings.validate()

        message = str(exc_info.value)
        assert "Anthropic:ApiKey" in message
        assert "Anthropic:Endpoint" in message

    def test_missing_credentials_rejected(self):
        with pytest.raises(ValueError, match="ApiKey is missing"):
            Settings(endpoint="https://api.anthropic.com").validate()

    @pytest.mark.parametrize(
        "field, value, fragment",
        [
            ("max_concurrency", 0, "MaxConcurrency"),
            ("timeout", -5.0, "TimeoutSeconds"),
            ("failure_policy", "retry", "FailurePolicy"),
            ("tone", "sarcastic", "Tone"),
        ],
    )
    def test_invalid_values_rejected(self, field, value, fragment):
        settings = Settings(api_key="sk-ant", endpoint="https://api.anthropic.com")
        setattr(settings, field, value)

        with pytest.raises(ValueError, match=fragment):
            settings.validate()


class TestConfigTypes:
    """Test values of the wrong JSON type in the configuration file."""

    def test_null_numbers_use_defaults(self, tmp_path, valid_config):
        valid_config["MaxConcurrency"] = None
        valid_config["TimeoutSeconds"] = None
        settings = load_settings(write_config(tmp_path, valid_config), environ={})

        assert settings.max_concurrency == 3
        assert settings.timeout is None
        settings.validate()

    def test_numeric_strings_accepted(self, tmp_path, valid_config):
        valid_config["MaxConcurrency"] = "4"
        valid_config["TimeoutSeconds"] = "2.5"
        settings = load_settings(write_config(tmp_path, valid_config), environ={})

        assert settings.max_concurrency == 4
        assert settings.timeout == 2.5

    @pytest.mark.parametrize(
        "key, value",
        [
            ("MaxConcurrency", [1]),
            ("MaxConcurrency", "many"),
            ("MaxConcurrency", {"value": 3}),
            ("MaxConcurrency", True),
            ("TimeoutSeconds", "soon"),
            ("TimeoutSeconds", [30]),
        ],
    )
    def test_wrong_numeric_type_raises_value_error(self, tmp_path, valid_config, key, value):
        valid_config[key] = value

        with pytest.raises(ValueError, match=f"Invalid configuration: {key}"):
            load_settings(write_config(tmp_path, valid_config), environ={})

    @pytest.mark.parametrize("section", ["sk-ant-key", ["sk-ant-key"], 42])
    def test_non_object_anthropic_section_raises(self, tmp_path, valid_config, section):
        valid_config["Anthropic"] = section

        with pytest.raises(ValueError, match="Anthropic must be an object"):
            load_settings(write_config(tmp_path, valid_config), environ={})
