# wasm_indexer/database/writers/__init__.py

from .wasm_writer import WasmDatabase
