# wasm_indexer/types/config.py

from typing import Optional
from pathlib import Path

from msgspec import Struct


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10

class NodeConfig(Struct):
    lcd_url: str
    timeout: int = 30

class WasmConfig(Struct):
    result_encoding: str = "base64"

class LoggingConfig(Struct):
    log_dir: Optional[Path] = None
    log_level: str = "INFO"
    console_enabled: bool = True
    file_enabled: bool = True
    structured_format: bool = False
