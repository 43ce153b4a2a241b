# wasm_indexer/database/repositories/__init__.py

from .wasm_repository import (
    WasmParamsRepository,
    WasmCodeRepository,
    WasmContractRepository,
    WasmExecuteContractRepository,
)
