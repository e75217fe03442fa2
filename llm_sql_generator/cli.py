"""
Komut satırı arayüzü.
"""
import argparse
import logging
import sys
import threading
from typing import List, Optional

from .config import DEFAULT_CONFIG_FILE, init_yml_cfg
from .exceptions import ConfigError, ResponseFormatError, Txt2SqlError
from .llm import LLMHandler
from .log import DEFAULT_LOGGING_FILE, mask_secret, setup_logging
from .schema import SAMPLE_QUESTION, SAMPLE_SCHEMA, load_schema_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm-sql-generator",
        description="Turn a natural-language question into SQL with an LLM chat-completion API",
    )
    parser.add_argument("question", nargs="?", default=SAMPLE_QUESTION,
                        help="Question to convert (default: a demo question)")
    parser.add_argument("--schema-file",
                        help="Schema description, plain text or YAML (default: demo schema)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE,
                        help=f"YAML config file (default: {DEFAULT_CONFIG_FILE})")
    parser.add_argument("--logging-config", default=DEFAULT_LOGGING_FILE,
                        help=f"YAML logging config (default: {DEFAULT_LOGGING_FILE})")
    parser.add_argument("--raw", action="store_true",
                        help="Print the raw API response instead of the SQL statement")
    parser.add_argument("--ui", action="store_true",
                        help="Start the web UI")
    return parser


def _run_raw(handler: LLMHandler, question: str, schema_text: str):
    response_json = handler.generate_raw(question, schema_text)
    try:
        logger.info("convert result: %s", LLMHandler.extract_content(response_json))
    except (ValueError, ResponseFormatError) as e:
        logger.warning("could not read message content from response: %s", e)
    print(response_json)


def main(argv: Optional[List[str]] = None) -> int:
    """Uygulamayı başlat."""
    args = build_parser().parse_args(argv)

    threading.current_thread().name = "boot"
    setup_logging(args.logging_config)

    cfg = init_yml_cfg(args.config)
    try:
        handler = LLMHandler.from_config(cfg)
    except ConfigError as e:
        logger.error("invalid config %s: %s", args.config, e)
        return 1
    logger.info("api_uri %s, api_key %s, model %s",
                handler.api_uri, mask_secret(handler.api_key), handler.model_name)

    try:
        schema_text = load_schema_file(args.schema_file) if args.schema_file else SAMPLE_SCHEMA
    except (OSError, ValueError, ConfigError) as e:
        logger.error("could not load schema: %s", e)
        return 1

    if args.ui:
        from .app import SQLGeneratorApp

        SQLGeneratorApp(handler, schema_text).launch()
        return 0

    try:
        if args.raw:
            _run_raw(handler, args.question, schema_text)
        else:
            sql = handler.generate_sql(args.question, schema_text)
            logger.info("convert result: %s", sql)
            print(sql)
    except Txt2SqlError:
        logger.error("convert failed", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
