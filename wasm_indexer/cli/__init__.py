# wasm_indexer/cli/__init__.py
