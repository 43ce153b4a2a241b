# wasm_indexer/types/model/__init__.py

from .wasm import (
    WasmRecord,
    WasmParams,
    WasmCode,
    WasmContract,
    WasmExecuteContract,
)
