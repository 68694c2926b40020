"""
Configuration Manager
====================

Manages translator settings and their JSON persistence.
"""

import json
import logging
import shutil
import tempfile
import threading
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import List, Optional

from gtranslate.core.constants import (
    DEFAULT_KEY_NAME, DEFAULT_SERVICE_URLS, DEFAULT_USER_AGENT,
    KEY_FALLBACK_RETRY, REQUEST_TIMEOUT_TOTAL,
)


@dataclass
class TranslatorConfig:
    """Translator client settings."""
    service_urls: List[str] = field(default_factory=list)  # one is picked per client
    user_agents: List[str] = field(default_factory=list)   # one is picked per client
    proxy: str = ""  # http(s) proxy URL, empty = direct
    timeout: float = REQUEST_TIMEOUT_TOTAL
    verify_ssl: bool = True
    seed: Optional[int] = None  # seeds the client's own random source
    # Key pair handling
    key_name: str = DEFAULT_KEY_NAME
    key_max_age: Optional[float] = None  # seconds; None = keep until refresh
    fallback_retry: float = KEY_FALLBACK_RETRY

    def __post_init__(self):
        if not self.service_urls:
            self.service_urls = list(DEFAULT_SERVICE_URLS)
        if not self.user_agents:
            self.user_agents = [DEFAULT_USER_AGENT]


class ConfigManager:
    """Loads and saves ``TranslatorConfig`` as JSON."""

    def __init__(self, config_file: str = "gtranslate.json"):
        self.logger = logging.getLogger(__name__)
        self.config_file = Path(config_file)
        self._lock = threading.Lock()
        self.translator_config = TranslatorConfig()
        self.load_config()

    def load_config(self) -> bool:
        """Load configuration from file; keep defaults when it is missing or broken."""
        with self._lock:
            if not self.config_file.exists():
                self.logger.debug(f"Config file not found, using defaults: {self.config_file}")
                return False
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                section = self._filter_config_data(TranslatorConfig, data.get('translator', {}))
                self.translator_config = TranslatorConfig(**section)
                self.logger.info(f"Configuration loaded from {self.config_file}")
                return True
            except (OSError, ValueError, TypeError, AttributeError) as e:
                self.logger.error(f"Error loading configuration: {e}")
                return False

    def save_config(self, translator_config: Optional[TranslatorConfig] = None) -> bool:
        """Save configuration to file (atomic & thread-safe)."""
        with self._lock:
            if translator_config is not None:
                self.translator_config = translator_config
            config_data = {'translator': asdict(self.translator_config)}
            try:
                dir_name = self.config_file.parent.absolute()
                # Temp file in the same directory so the move stays atomic
                with tempfile.NamedTemporaryFile('w', dir=str(dir_name), delete=False, encoding='utf-8') as tf:
                    json.dump(config_data, tf, indent=4, ensure_ascii=False)
                    temp_name = tf.name
                shutil.move(temp_name, str(self.config_file))
                self.logger.info("Configuration saved successfully (Atomic)")
                return True
            except OSError as e:
                self.logger.error(f"Error saving configuration: {e}")
                return False

    def _filter_config_data(self, dataclass_type, data):
        """Filter dictionary keys to match dataclass fields to avoid __init__ errors."""
        if not isinstance(data, dict):
            return {}
        valid_fields = {f.name for f in fields(dataclass_type)}
        return {k: v for k, v in data.items() if k in valid_fields}
