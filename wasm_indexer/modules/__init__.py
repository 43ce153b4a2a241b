# wasm_indexer/modules/__init__.py

from .wasm import WasmModule
