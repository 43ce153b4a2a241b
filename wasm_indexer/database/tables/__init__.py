# wasm_indexer/database/tables/__init__.py

from .wasm import DBWasmParams, DBWasmCode, DBWasmContract, DBWasmExecuteContract

__all__ = [
    'DBWasmParams',
    'DBWasmCode',
    'DBWasmContract',
    'DBWasmExecuteContract',
]
