# wasm_indexer/modules/wasm/__init__.py

from .module import WasmModule
