"""
LLM SQL Oluşturucu

Bu modül, doğal dildeki soruları bir sohbet tamamlama servisi (varsayılan
olarak DeepSeek) aracılığıyla SQL sorgularına dönüştüren bir araç sağlar.
"""

__version__ = "0.1.0"

from .config import ApiSettings, get_api_settings, init_yml_cfg
from .exceptions import (
    ConfigError,
    LLMAPIError,
    ResponseFormatError,
    SQLGeneratorError,
    Txt2SqlError,
)
from .llm import LLMHandler
from .log import setup_logging
from .schema import SAMPLE_SCHEMA, format_schema_for_prompt, load_schema_file

__all__ = [
    'ApiSettings',
    'get_api_settings',
    'init_yml_cfg',
    'ConfigError',
    'LLMAPIError',
    'ResponseFormatError',
    'SQLGeneratorError',
    'Txt2SqlError',
    'LLMHandler',
    'setup_logging',
    'SAMPLE_SCHEMA',
    'format_schema_for_prompt',
    'load_schema_file',
]
