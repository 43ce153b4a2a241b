"""
Database interfaces for the wasm indexer.

This module defines the store the message handlers write to. Any object
implementing these operations can stand in for the database.
"""
from abc import ABC, abstractmethod

from ..types import CosmosAddress, WasmCode, WasmContract, WasmExecuteContract, WasmParams


class WasmStoreInterface(ABC):
    """Interface for x/wasm record persistence."""

    @abstractmethod
    def save_code(self, code: WasmCode) -> None:
        """Persist an uploaded code record."""
        pass

    @abstractmethod
    def save_contract(self, contract: WasmContract) -> None:
        """Persist a newly instantiated contract."""
        pass

    @abstractmethod
    def save_execute(self, execute: WasmExecuteContract) -> None:
        """Append a contract execution."""
        pass

    @abstractmethod
    def save_params(self, params: WasmParams) -> None:
        """Persist a module params snapshot."""
        pass

    @abstractmethod
    def update_contract_on_migrate(
        self,
        sender: CosmosAddress,
        contract_address: CosmosAddress,
        new_code_id: int,
        migrate_payload: bytes,
        result_data: bytes,
    ) -> None:
        """
        Apply a migration to an indexed contract.

        Args:
            sender: Address that sent the migrate message
            contract_address: Contract being migrated
            new_code_id: Code id the contract now runs
            migrate_payload: Raw migrate message (JSON bytes)
            result_data: Raw result data of the migration
        """
        pass

    @abstractmethod
    def update_contract_admin(
        self,
        sender: CosmosAddress,
        contract_address: CosmosAddress,
        new_admin: str,
    ) -> None:
        """
        Set a contract's admin. An empty admin clears it.
        """
        pass
