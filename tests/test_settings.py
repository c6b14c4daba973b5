from pathlib import Path

import pytest

from config.settings import DEFAULT_ROUTER_URL, AppSettings
from core.errors import ConfigurationError


def test_defaults_without_environment():
    settings = AppSettings.from_env({})

    assert settings.provider.base_url == DEFAULT_ROUTER_URL
    assert settings.provider.token is None
    assert settings.server.port == 3000
    assert settings.models.vision == "Qwen/Qwen2.5-VL-7B-Instruct"
    assert settings.storage.library_path == Path("storage/library.json")
    assert settings.log_level == "INFO"


def test_environment_overrides():
    settings = AppSettings.from_env(
        {
            "HUGGINGFACE_TOKEN": "tok2",
            "VITE_HF_TOKEN": "tok3",
            "HF_FLUX_MODEL": "black-forest-labs/FLUX.1-dev",
            "HF_BASE_URL": "https://router.example",
            "PALETTEAI_LIBRARY_PATH": "/tmp/styles.json",
            "PORT": "8080",
            "PALETTEAI_LOG_LEVEL": "DEBUG",
        }
    )

    assert settings.provider.token == "tok2"
    assert settings.server.token == "tok2"
    assert settings.models.image == "black-forest-labs/FLUX.1-dev"
    assert settings.provider.chat_completions_url() == "https://router.example/v1/chat/completions"
    assert settings.server.upstream_url == "https://router.example"
    assert settings.storage.library_path == Path("/tmp/styles.json")
    assert settings.server.port == 8080
    assert settings.log_level == "DEBUG"


def test_first_token_variable_wins():
    settings = AppSettings.from_env({"HF_TOKEN": "tok1", "HUGGINGFACE_TOKEN": "tok2"})

    assert settings.provider.token == "tok1"


def test_proxy_url_routes_client_through_proxy():
    settings = AppSettings.from_env({"HF_TOKEN": "tok1", "PALETTEAI_PROXY_URL": "http://localhost:3000"})

    assert settings.provider.token is None
    assert settings.provider.chat_completions_url() == "http://localhost:3000/api/hf/chat/completions"
    assert settings.server.token == "tok1"


def test_token_is_hidden_from_repr():
    settings = AppSettings.from_env({"HF_TOKEN": "very-secret"})

    assert "very-secret" not in repr(settings)


def test_invalid_port_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        AppSettings.from_env({"PORT": "http"})


def test_blank_model_id_is_a_configuration_error():
    settings = AppSettings.from_env({})

    with pytest.raises(ConfigurationError):
        settings.provider.model_url("  ")
