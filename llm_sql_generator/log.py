"""
Loglama ayarları için modül.
"""
import logging
import logging.config
import os

import yaml

DEFAULT_LOGGING_FILE = "config/logging.yml"
LOG_FORMAT = "%(asctime)s [%(threadName)s] %(levelname)s %(name)s - %(message)s"

_configured = False


def setup_logging(config_file: str = DEFAULT_LOGGING_FILE, level: int = logging.INFO, force: bool = False):
    """Loglamayı başlatır.

    Dosya varsa ``logging.config.dictConfig`` ile uygulanır, yoksa
    ``logging.basicConfig`` kullanılır.

    Args:
        config_file: dictConfig şemasında YAML dosyası; boşsa veya yoksa basicConfig kullanılır
        level: Yedek yapılandırmadaki log seviyesi
        force: Daha önce yapılandırılmış olsa bile yeniden uygula
    """
    global _configured

    if _configured and not force:
        return

    log_config = None
    if config_file and os.path.exists(config_file):
        with open(config_file, "r", encoding="utf-8") as f:
            log_config = yaml.safe_load(f)

    if isinstance(log_config, dict):
        logging.config.dictConfig(log_config)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, force=force)

    _configured = True
    logging.getLogger(__name__).debug("logging configured from %s", config_file)


def mask_secret(value) -> str:
    """API anahtarını loglamak için maskeler."""
    if value is None:
        return "None"
    value = str(value)
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:3]}...{value[-4:]}"
