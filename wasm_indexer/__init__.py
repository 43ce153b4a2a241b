# wasm_indexer/__init__.py

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv

from .core.config import IndexerConfig, logging_config_from_env
from .core.logging import IndexerLogger, log_with_context
from .database.connection import DatabaseManager
from .database.interfaces import WasmStoreInterface
from .database.writers.wasm_writer import WasmDatabase
from .modules.wasm.module import WasmModule
from .source.interfaces import ContractSourceInterface
from .source.remote import LcdContractSource


def create_indexer(env_vars: Optional[Mapping[str, str]] = None,
                   source: Optional[ContractSourceInterface] = None,
                   store: Optional[WasmStoreInterface] = None) -> WasmModule:
    """
    Build a WasmModule wired to the configured node and database.

    `source` and `store` replace the LCD client and the SQL store when given.
    """
    if env_vars is None:
        load_dotenv()
    env = os.environ if env_vars is None else env_vars
    _configure_logging_early(env)

    logger = IndexerLogger.get_logger('core.init')
    logger.info("Creating wasm indexer instance")

    config = IndexerConfig.from_env(env)

    if source is None:
        source = LcdContractSource(config.node.lcd_url, timeout=config.node.timeout)

    if store is None:
        db_manager = DatabaseManager(config.database)
        db_manager.initialize()
        db_manager.create_tables()
        store = WasmDatabase(db_manager)

    module = WasmModule(source, store, result_encoding=config.wasm.result_encoding)

    log_with_context(logger, logging.INFO, "Wasm indexer created successfully",
                     source=type(source).__name__,
                     store=type(store).__name__)

    return module


def _configure_logging_early(env: Mapping[str, str]) -> None:
    IndexerLogger.configure(logging_config_from_env(env))


__all__ = [
    'create_indexer',
    'IndexerConfig',
    'WasmModule',
]
