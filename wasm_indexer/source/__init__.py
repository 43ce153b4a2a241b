# wasm_indexer/source/__init__.py

from .interfaces import ContractInfo, ContractSourceInterface
from .remote import LcdContractSource
