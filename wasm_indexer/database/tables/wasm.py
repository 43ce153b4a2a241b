# wasm_indexer/database/tables/wasm.py

from sqlalchemy import Column, BigInteger, Boolean, DateTime, ForeignKey, Integer, JSON, LargeBinary, String, Text

from ..base import DBWasmRecordModel


class DBWasmParams(DBWasmRecordModel):
    __tablename__ = 'wasm_params'

    one_row_id = Column(Boolean, primary_key=True, default=True)
    code_upload_access = Column(JSON, nullable=True)
    instantiate_default_permission = Column(String(64), nullable=False)
    max_wasm_code_size = Column(BigInteger, nullable=True)


class DBWasmCode(DBWasmRecordModel):
    __tablename__ = 'wasm_code'

    code_id = Column(BigInteger, primary_key=True, autoincrement=False)
    sender = Column(String(128), nullable=False, index=True)
    byte_code = Column(LargeBinary, nullable=False)
    instantiate_permission = Column(JSON, nullable=True)


class DBWasmContract(DBWasmRecordModel):
    __tablename__ = 'wasm_contract'

    contract_address = Column(String(128), primary_key=True)
    sender = Column(String(128), nullable=False)
    creator = Column(String(128), nullable=False, index=True)
    admin = Column(String(128), nullable=False, default="")
    code_id = Column(BigInteger, ForeignKey('wasm_code.code_id'), nullable=False, index=True)
    label = Column(Text, nullable=False, default="")
    raw_contract_message = Column(LargeBinary, nullable=False)
    funds = Column(JSON, nullable=False, default=list)
    data = Column(LargeBinary, nullable=False, default=b"")
    instantiated_at = Column(DateTime(timezone=True), nullable=False)
    contract_info_extension = Column(Text, nullable=False, default="")


class DBWasmExecuteContract(DBWasmRecordModel):
    __tablename__ = 'wasm_execute_contract'

    content_id = Column(String(16), primary_key=True)
    tx_hash = Column(String(64), nullable=False, index=True)
    msg_index = Column(Integer, nullable=False)
    sender = Column(String(128), nullable=False, index=True)
    contract_address = Column(String(128), nullable=False, index=True)
    raw_contract_message = Column(LargeBinary, nullable=False)
    funds = Column(JSON, nullable=False, default=list)
    data = Column(LargeBinary, nullable=False, default=b"")
    executed_at = Column(DateTime(timezone=True), nullable=False)
