# wasm_indexer/core/config.py

from msgspec import Struct
from typing import Mapping, Optional
from pathlib import Path
import os
import logging

from ..types.config import DatabaseConfig, NodeConfig, WasmConfig, LoggingConfig
from ..decode.payload import RESULT_ENCODINGS
from .logging import IndexerLogger, log_with_context


class IndexerConfig(Struct):
    database: DatabaseConfig
    node: NodeConfig
    wasm: WasmConfig

    @classmethod
    def from_env(cls, env_vars: Optional[Mapping[str, str]] = None) -> 'IndexerConfig':
        logger = IndexerLogger.get_logger('core.config')

        if env_vars is None:
            from dotenv import load_dotenv
            load_dotenv()
        env = os.environ if env_vars is None else env_vars

        config = cls(
            database=cls._create_database_config(env),
            node=cls._create_node_config(env),
            wasm=cls._create_wasm_config(env),
        )

        log_with_context(logger, logging.INFO, "IndexerConfig created successfully",
                         lcd_url=config.node.lcd_url,
                         result_encoding=config.wasm.result_encoding)

        return config

    @staticmethod
    def _create_database_config(env: Mapping[str, str]) -> DatabaseConfig:
        logger = IndexerLogger.get_logger('core.config.database')

        pool_size = int(env.get("INDEXER_DB_POOL_SIZE", "5"))
        max_overflow = int(env.get("INDEXER_DB_MAX_OVERFLOW", "10"))

        db_url = env.get("INDEXER_DB_URL")
        if db_url:
            log_with_context(logger, logging.DEBUG, "Database configuration taken from INDEXER_DB_URL")
            return DatabaseConfig(url=db_url, pool_size=pool_size, max_overflow=max_overflow)

        db_user = env.get("INDEXER_DB_USER")
        db_password = env.get("INDEXER_DB_PASSWORD")
        db_host = env.get("INDEXER_DB_HOST") or "127.0.0.1"
        db_port = env.get("INDEXER_DB_PORT") or "5432"
        db_name = env.get("INDEXER_DB_NAME", "wasm_indexer")

        if not db_user or not db_password:
            raise ValueError("Database credentials not found: set INDEXER_DB_URL or INDEXER_DB_USER/INDEXER_DB_PASSWORD")

        db_url = f"postgresql+psycopg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"

        log_with_context(logger, logging.DEBUG, "Database configuration created",
                         db_host=db_host, db_port=db_port, db_name=db_name)

        return DatabaseConfig(url=db_url, pool_size=pool_size, max_overflow=max_overflow)

    @staticmethod
    def _create_node_config(env: Mapping[str, str]) -> NodeConfig:
        lcd_url = env.get("INDEXER_LCD_URL")
        if not lcd_url:
            raise ValueError("INDEXER_LCD_URL environment variable required")

        return NodeConfig(
            lcd_url=lcd_url.rstrip("/"),
            timeout=int(env.get("INDEXER_LCD_TIMEOUT", "30")),
        )

    @staticmethod
    def _create_wasm_config(env: Mapping[str, str]) -> WasmConfig:
        encoding = env.get("INDEXER_RESULT_ENCODING", "base64").lower()
        if encoding not in RESULT_ENCODINGS:
            raise ValueError(f"INDEXER_RESULT_ENCODING must be one of {RESULT_ENCODINGS}, got {encoding!r}")

        return WasmConfig(result_encoding=encoding)


def logging_config_from_env(env: Mapping[str, str]) -> LoggingConfig:
    log_dir_env = env.get("INDEXER_LOG_DIR")
    log_dir = Path(log_dir_env) if log_dir_env else Path.cwd() / "logs"

    return LoggingConfig(
        log_dir=log_dir,
        log_level=env.get("INDEXER_LOG_LEVEL", "INFO"),
        console_enabled=env.get("INDEXER_LOG_CONSOLE", "true").lower() == "true",
        file_enabled=env.get("INDEXER_LOG_FILE", "true").lower() == "true",
        structured_format=env.get("INDEXER_LOG_STRUCTURED", "false").lower() == "true",
    )
