"""
LLM servis ayarları ve YAML yapılandırma yükleyicisi.
"""
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict

import yaml

from .exceptions import ConfigError
from .log import mask_secret

logger = logging.getLogger(__name__)

# Servis ayarları
DEFAULT_API_URL = "https://api.deepseek.com/v1/chat/completions"
DEFAULT_MODEL_NAME = "deepseek-chat"
CHAT_COMPLETIONS_PATH = "/chat/completions"

# Model ayarları
MODEL_CONFIG = {
    "temperature": 0.7,
    "max_tokens": 4096,
}

CONNECT_TIMEOUT = 30.0
REQUEST_TIMEOUT = 60.0

# Dosya yolları
DEFAULT_CONFIG_FILE = "config/cfg.yml"

# Çıkış kodları
EXIT_CONFIG_MISSING = -2
EXIT_CONFIG_UNREADABLE = -1

# Prompt şablonu
SYSTEM_PROMPT_TEMPLATE = """You are a professional SQL generation assistant. Using the database schema and the user's question, write an accurate and efficient SQL query.

Database schema:
{schema}

Follow these rules:
1. Output only the SQL statement, without any explanation or extra text
2. Make sure the SQL syntax is correct and follows standard SQL
3. Use appropriate JOIN clauses to connect related tables
4. Include the necessary WHERE conditions
5. If the question involves a time range, use suitable date functions
6. Prefer EXISTS over IN subqueries for performance
7. Avoid SELECT *, name the columns you need explicitly

Generate the SQL statement for the schema above and the user's question:"""

_init_cfg: Dict[str, Any] = {}


@dataclass(frozen=True)
class ApiSettings:
    """Bir sohbet tamamlama servisinin bağlantı ayarları."""

    api_uri: str
    api_key: str
    model_name: str


def _masked(cfg: Dict[str, Any]) -> Dict[str, Any]:
    api = cfg.get("api")
    if not isinstance(api, dict) or "llm_api_key" not in api:
        return cfg
    return {**cfg, "api": {**api, "llm_api_key": mask_secret(api["llm_api_key"])}}


def init_yml_cfg(cfg_file: str = DEFAULT_CONFIG_FILE) -> Dict[str, Any]:
    """YAML yapılandırmasını süreç başına bir kez yükler.

    Sonraki çağrılar dosyayı tekrar okumaz, önbellekteki sözlüğü döndürür.
    Dosya yoksa ``EXIT_CONFIG_MISSING``, okunamıyorsa ``EXIT_CONFIG_UNREADABLE``
    koduyla süreç sonlandırılır.

    Args:
        cfg_file: Yapılandırma dosyasının yolu

    Returns:
        Yapılandırma sözlüğü
    """
    global _init_cfg

    if _init_cfg:
        logger.info("cfg already initialized, returning cached cfg: %s", _masked(_init_cfg))
        return _init_cfg

    if not os.path.exists(cfg_file):
        logger.info(
            "Config file %s does not exist. Copy %s.template, fill in your "
            "environment settings and rename it to %s",
            cfg_file, cfg_file, cfg_file,
        )
        sys.exit(EXIT_CONFIG_MISSING)

    try:
        with open(cfg_file, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to read config file %s: %s", cfg_file, e, exc_info=True)
        sys.exit(EXIT_CONFIG_UNREADABLE)

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        logger.error("Config file %s must contain a mapping, got %s", cfg_file, type(loaded).__name__)
        sys.exit(EXIT_CONFIG_UNREADABLE)

    _init_cfg = loaded
    logger.info("init cfg from cfg file %s: %s", cfg_file, _masked(_init_cfg))
    return _init_cfg


def reset_cfg():
    """Önbellekteki yapılandırmayı temizler."""
    global _init_cfg
    _init_cfg = {}


def get_api_settings(cfg: Dict[str, Any]) -> ApiSettings:
    """Yüklenmiş yapılandırmanın ``api`` bölümünü okur.

    ``llm_api_uri`` servisin temel adresidir, sonuna sohbet tamamlama yolu eklenir.
    """
    api = cfg.get("api")
    if not isinstance(api, dict):
        raise ConfigError("Missing 'api' section in config")

    values = {}
    for key in ("llm_api_uri", "llm_api_key", "llm_model_name"):
        value = api.get(key)
        if value is None or value == "":
            raise ConfigError(f"Missing config key: api.{key}")
        values[key] = str(value)

    return ApiSettings(
        api_uri=values["llm_api_uri"].rstrip("/") + CHAT_COMPLETIONS_PATH,
        api_key=values["llm_api_key"],
        model_name=values["llm_model_name"],
    )
