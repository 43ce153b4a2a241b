"""
Interfaces for chain state sources.

This module defines the interfaces for querying contract metadata that is
not present in transaction logs and must be read from chain state.
"""
from abc import ABC, abstractmethod

from msgspec import Struct

from ..types import CosmosAddress, WasmParams


class ContractInfo(Struct, frozen=True):
    code_id: int
    creator: CosmosAddress
    admin: str = ""
    label: str = ""
    extension: str = ""  # JSON text, empty when the contract has none


class ContractSourceInterface(ABC):
    """Interface for contract metadata sources."""

    @abstractmethod
    def get_contract_info(self, height: int, address: CosmosAddress) -> ContractInfo:
        """
        Get the contract info stored on chain.

        Args:
            height: Block height the state is read at
            address: Contract address

        Returns:
            Contract info

        Raises:
            ContractSourceError: if the contract cannot be read at that height
        """
        pass

    @abstractmethod
    def get_params(self, height: int) -> WasmParams:
        """
        Get the x/wasm module parameters.

        Args:
            height: Block height the state is read at

        Returns:
            Module parameters snapshot
        """
        pass
