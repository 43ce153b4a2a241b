# wasm_indexer/database/repositories/wasm_repository.py

from typing import List

from sqlalchemy.orm import Session
from sqlalchemy import desc, update

from ...types import CosmosAddress
from ..base_repository import BaseRepository
from ...core.logging import log_with_context, ERROR

from ..tables import DBWasmParams, DBWasmCode, DBWasmContract, DBWasmExecuteContract


class WasmParamsRepository(BaseRepository):
    """Repository for the single x/wasm params row"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBWasmParams)

    def get_current(self, session: Session):
        return self.get_by_key(session, True)


class WasmCodeRepository(BaseRepository):
    """Repository for uploaded contract code"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBWasmCode)

    def get_by_sender(self, session: Session, sender: CosmosAddress, limit: int = 100) -> List[DBWasmCode]:
        """Get code uploaded by an address"""
        try:
            return session.query(DBWasmCode).filter(
                DBWasmCode.sender == sender
            ).order_by(desc(DBWasmCode.height)).limit(limit).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting code by sender",
                             sender=sender,
                             error=str(e))
            raise


class WasmContractRepository(BaseRepository):
    """Repository for instantiated contracts and their targeted updates"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBWasmContract)

    def get_by_code_id(self, session: Session, code_id: int, limit: int = 100) -> List[DBWasmContract]:
        """Get contracts instantiated from a code id"""
        try:
            return session.query(DBWasmContract).filter(
                DBWasmContract.code_id == code_id
            ).order_by(desc(DBWasmContract.height)).limit(limit).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting contracts by code id",
                             code_id=code_id,
                             error=str(e))
            raise

    def get_by_creator(self, session: Session, creator: CosmosAddress, limit: int = 100) -> List[DBWasmContract]:
        """Get contracts created by an address"""
        try:
            return session.query(DBWasmContract).filter(
                DBWasmContract.creator == creator
            ).order_by(desc(DBWasmContract.height)).limit(limit).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting contracts by creator",
                             creator=creator,
                             error=str(e))
            raise

    def update_on_migrate(self, session: Session, sender: CosmosAddress, contract_address: CosmosAddress,
                          code_id: int, raw_contract_message: bytes, data: bytes) -> int:
        """Point a contract at its new code; returns the number of rows changed"""
        result = session.execute(
            update(DBWasmContract)
            .where(DBWasmContract.contract_address == contract_address)
            .values(
                sender=sender,
                code_id=code_id,
                raw_contract_message=raw_contract_message,
                data=data,
            )
        )
        return result.rowcount

    def update_admin(self, session: Session, sender: CosmosAddress, contract_address: CosmosAddress,
                     admin: str) -> int:
        """Set (or clear, with "") a contract's admin; returns the number of rows changed"""
        result = session.execute(
            update(DBWasmContract)
            .where(DBWasmContract.contract_address == contract_address)
            .values(sender=sender, admin=admin)
        )
        return result.rowcount


class WasmExecuteContractRepository(BaseRepository):
    """Repository for append-only contract executions"""

    def __init__(self, db_manager):
        super().__init__(db_manager, DBWasmExecuteContract)

    def get_by_contract(self, session: Session, contract_address: CosmosAddress,
                        limit: int = 100) -> List[DBWasmExecuteContract]:
        """Get executions of a contract, newest first"""
        try:
            return session.query(DBWasmExecuteContract).filter(
                DBWasmExecuteContract.contract_address == contract_address
            ).order_by(desc(DBWasmExecuteContract.height), desc(DBWasmExecuteContract.msg_index)).limit(limit).all()
        except Exception as e:
            log_with_context(self.logger, ERROR, "Error getting executions by contract",
                             contract_address=contract_address,
                             error=str(e))
            raise

    def exists(self, session: Session, content_id: str) -> bool:
        return self.get_by_key(session, content_id) is not None
