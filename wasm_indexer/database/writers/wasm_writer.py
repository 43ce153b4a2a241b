# wasm_indexer/database/writers/wasm_writer.py

from typing import Callable, TypeVar
import traceback

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..connection import DatabaseManager
from ..interfaces import WasmStoreInterface
from ..tables import DBWasmParams, DBWasmCode, DBWasmContract, DBWasmExecuteContract
from ...core.logging import IndexerLogger, log_with_context, DEBUG, WARNING, ERROR
from ...types import (
    CosmosAddress,
    PersistenceError,
    WasmCode,
    WasmContract,
    WasmExecuteContract,
    WasmParams,
)

T = TypeVar('T')


class WasmDatabase(WasmStoreInterface):
    """
    SQLAlchemy-backed store for x/wasm records.

    Each operation runs in its own database transaction. Saves never move a
    row back to an older height; execute rows are written once per content id.
    Migrations and admin changes are targeted updates of the contract row.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.logger = IndexerLogger.get_logger('database.writers.wasm_writer')

    def save_code(self, code: WasmCode) -> None:
        row = DBWasmCode.row_from_msgspec(code)
        written = self._run(
            "save_code",
            lambda session: self.db_manager.get_code_repo().upsert_by_height(session, code.code_id, row),
            code_id=code.code_id,
            height=code.height,
        )
        log_with_context(self.logger, DEBUG, "Wasm code saved" if written else "Newer wasm code kept",
                         code_id=code.code_id, height=code.height)

    def save_contract(self, contract: WasmContract) -> None:
        row = DBWasmContract.row_from_msgspec(contract)
        written = self._run(
            "save_contract",
            lambda session: self.db_manager.get_contract_repo().upsert_by_height(
                session, contract.contract_address, row),
            contract_address=contract.contract_address,
            height=contract.height,
        )
        log_with_context(self.logger, DEBUG, "Wasm contract saved" if written else "Newer wasm contract kept",
                         contract_address=contract.contract_address, height=contract.height)

    def save_execute(self, execute: WasmExecuteContract) -> None:
        content_id = execute.content_id
        row = DBWasmExecuteContract.row_from_msgspec(execute, content_id=content_id)

        def write(session: Session) -> bool:
            repo = self.db_manager.get_execute_repo()
            if repo.exists(session, content_id):
                return False
            repo.create(session, **row)
            return True

        written = self._run("save_execute", write,
                            contract_address=execute.contract_address,
                            tx_hash=execute.tx_hash,
                            msg_index=execute.msg_index)
        log_with_context(self.logger, DEBUG, "Wasm execution saved" if written else "Wasm execution already stored",
                         contract_address=execute.contract_address, content_id=content_id)

    def save_params(self, params: WasmParams) -> None:
        row = DBWasmParams.row_from_msgspec(params, one_row_id=True)
        self._run(
            "save_params",
            lambda session: self.db_manager.get_params_repo().upsert_by_height(session, True, row),
            height=params.height,
        )

    def update_contract_on_migrate(
        self,
        sender: CosmosAddress,
        contract_address: CosmosAddress,
        new_code_id: int,
        migrate_payload: bytes,
        result_data: bytes,
    ) -> None:
        updated = self._run(
            "update_contract_on_migrate",
            lambda session: self.db_manager.get_contract_repo().update_on_migrate(
                session, sender, contract_address, new_code_id, migrate_payload, result_data),
            contract_address=contract_address,
            code_id=new_code_id,
        )
        self._warn_if_unknown(updated, "migrate", contract_address)

    def update_contract_admin(
        self,
        sender: CosmosAddress,
        contract_address: CosmosAddress,
        new_admin: str,
    ) -> None:
        updated = self._run(
            "update_contract_admin",
            lambda session: self.db_manager.get_contract_repo().update_admin(
                session, sender, contract_address, new_admin),
            contract_address=contract_address,
        )
        self._warn_if_unknown(updated, "admin update", contract_address)

    def _warn_if_unknown(self, updated: int, operation: str, contract_address: CosmosAddress) -> None:
        if not updated:
            log_with_context(self.logger, WARNING, f"Contract not indexed, {operation} matched no rows",
                             contract_address=contract_address)

    def _run(self, operation: str, work: Callable[[Session], T], **context) -> T:
        try:
            with self.db_manager.get_transaction() as session:
                return work(session)
        except SQLAlchemyError as e:
            log_with_context(self.logger, ERROR, f"Failed to {operation}",
                             error=str(e),
                             exception_type=type(e).__name__,
                             traceback=traceback.format_exc(),
                             **context)
            raise PersistenceError(f"{operation} failed: {e}", dict(context, operation=operation)) from e
