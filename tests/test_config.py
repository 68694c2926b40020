import json

from gtranslate.core.constants import DEFAULT_SERVICE_URLS, DEFAULT_USER_AGENT
from gtranslate.utils.config import ConfigManager, TranslatorConfig


def test_defaults_fill_empty_lists():
    config = TranslatorConfig()
    assert config.service_urls == DEFAULT_SERVICE_URLS
    assert config.user_agents == [DEFAULT_USER_AGENT]
    assert config.key_max_age is None


def test_save_then_load(tmp_path):
    path = tmp_path / "gtranslate.json"
    manager = ConfigManager(str(path))
    assert manager.save_config(TranslatorConfig(service_urls=["translate.google.de"], seed=7, timeout=5))

    reloaded = ConfigManager(str(path))
    assert reloaded.translator_config.service_urls == ["translate.google.de"]
    assert reloaded.translator_config.seed == 7
    assert reloaded.translator_config.timeout == 5


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "gtranslate.json"
    path.write_text(json.dumps({"translator": {"proxy": "http://p:1", "bogus": True}}), encoding="utf-8")
    manager = ConfigManager(str(path))
    assert manager.translator_config.proxy == "http://p:1"


def test_broken_file_keeps_defaults(tmp_path):
    path = tmp_path / "gtranslate.json"
    path.write_text("{not json", encoding="utf-8")
    manager = ConfigManager(str(path))
    assert manager.load_config() is False
    assert manager.translator_config == TranslatorConfig()
