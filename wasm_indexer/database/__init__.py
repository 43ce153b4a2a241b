# wasm_indexer/database/__init__.py

from .base import Base
from .connection import DatabaseManager
from .interfaces import WasmStoreInterface
from .writers import WasmDatabase
