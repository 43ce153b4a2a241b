# wasm_indexer/modules/wasm/module.py

from typing import Any

from ...core.logging import LoggingMixin
from ...database.interfaces import WasmStoreInterface
from ...decode import (
    EVENT_TYPE_STORE_CODE,
    EVENT_TYPE_INSTANTIATE,
    EVENT_TYPE_EXECUTE,
    EVENT_TYPE_MIGRATE,
    ATTRIBUTE_KEY_CODE_ID,
    ATTRIBUTE_KEY_CONTRACT_ADDR,
    ATTRIBUTE_KEY_RESULT_DATA,
    ENCODING_BASE64,
    RESULT_ENCODINGS,
    find_event,
    find_attribute,
    decode_result_data,
    parse_code_id,
    parse_timestamp,
)
from ...source.interfaces import ContractSourceInterface
from ...types import (
    Event,
    Tx,
    MsgStoreCode,
    MsgInstantiateContract,
    MsgExecuteContract,
    MsgMigrateContract,
    MsgUpdateAdmin,
    MsgClearAdmin,
    WasmCode,
    WasmContract,
    WasmExecuteContract,
    WasmIndexerError,
    raw_contract_message,
)


class WasmModule(LoggingMixin):
    """
    Turns x/wasm messages and the events they emitted into stored records.

    handle_msg is called once per message, in transaction order. It holds no
    state of its own: contract metadata comes from the source and records go
    straight to the store. Any failure aborts the message and is raised.
    """

    name = "wasm"

    def __init__(self, source: ContractSourceInterface, db: WasmStoreInterface,
                 result_encoding: str = ENCODING_BASE64):
        if result_encoding not in RESULT_ENCODINGS:
            raise ValueError(f"Unsupported result encoding: {result_encoding}")

        self.source = source
        self.db = db
        self.result_encoding = result_encoding

        self.log_info("WasmModule initialized", result_encoding=result_encoding)

    def handle_tx(self, tx: Tx) -> None:
        """Handle every message of a transaction, in order"""
        for index, msg in enumerate(tx.messages):
            self.handle_msg(index, msg, tx)

    def handle_msg(self, index: int, msg: Any, tx: Tx) -> None:
        # Messages that failed before emitting events have nothing to index
        if not tx.has_events():
            self.log_debug("Transaction has no events, skipping message",
                           tx_hash=tx.txhash, msg_index=index)
            return

        try:
            if isinstance(msg, MsgStoreCode):
                self.handle_msg_store_code(index, tx, msg)
            elif isinstance(msg, MsgInstantiateContract):
                self.handle_msg_instantiate_contract(index, tx, msg)
            elif isinstance(msg, MsgExecuteContract):
                self.handle_msg_execute_contract(index, tx, msg)
            elif isinstance(msg, MsgMigrateContract):
                self.handle_msg_migrate_contract(index, tx, msg)
            elif isinstance(msg, MsgUpdateAdmin):
                self.handle_msg_update_admin(msg)
            elif isinstance(msg, MsgClearAdmin):
                self.handle_msg_clear_admin(msg)
        except WasmIndexerError as e:
            e.add_context(tx_hash=tx.txhash, msg_index=index, height=tx.height,
                          msg_type=type(msg).__name__)
            self.log_failure("Failed to handle wasm message", e)
            raise

    def handle_msg_store_code(self, index: int, tx: Tx, msg: MsgStoreCode) -> None:
        """Index uploaded code under the code id assigned in the store_code event"""
        event = find_event(tx, index, EVENT_TYPE_STORE_CODE)
        code_id_value = find_attribute(event, ATTRIBUTE_KEY_CODE_ID, tx.txhash)
        code_id = parse_code_id(code_id_value, ATTRIBUTE_KEY_CODE_ID)

        self.db.save_code(WasmCode.from_msg(msg, code_id, tx.height))
        self.log_debug("Stored wasm code", tx_hash=tx.txhash, code_id=code_id, height=tx.height)

    def handle_msg_instantiate_contract(self, index: int, tx: Tx, msg: MsgInstantiateContract) -> None:
        """Index a new contract instance of previously stored code"""
        event = find_event(tx, index, EVENT_TYPE_INSTANTIATE)
        contract_address = find_attribute(event, ATTRIBUTE_KEY_CONTRACT_ADDR, tx.txhash)
        data = self._result_data(event, tx)

        contract_info = self.source.get_contract_info(tx.height, contract_address)
        instantiated_at = parse_timestamp(tx.timestamp, "timestamp")

        self.db.save_contract(
            WasmContract.from_msg(
                msg, contract_address, data, instantiated_at,
                contract_info.creator, contract_info.extension, tx.height,
            )
        )
        self.log_debug("Stored wasm contract", tx_hash=tx.txhash,
                       contract_address=contract_address, code_id=msg.code_id)

    def handle_msg_execute_contract(self, index: int, tx: Tx, msg: MsgExecuteContract) -> None:
        """Append an execution of an instantiated contract"""
        event = find_event(tx, index, EVENT_TYPE_EXECUTE)
        data = self._result_data(event, tx)
        executed_at = parse_timestamp(tx.timestamp, "timestamp")

        self.db.save_execute(
            WasmExecuteContract.from_msg(msg, data, executed_at, tx.height, tx.txhash, index)
        )

    def handle_msg_migrate_contract(self, index: int, tx: Tx, msg: MsgMigrateContract) -> None:
        """Move a contract to new code; the code id and payload are taken from the message"""
        event = find_event(tx, index, EVENT_TYPE_MIGRATE)
        data = self._result_data(event, tx)

        self.db.update_contract_on_migrate(
            msg.sender, msg.contract, msg.code_id, raw_contract_message(msg), data
        )

    def handle_msg_update_admin(self, msg: MsgUpdateAdmin) -> None:
        self.db.update_contract_admin(msg.sender, msg.contract, msg.new_admin)

    def handle_msg_clear_admin(self, msg: MsgClearAdmin) -> None:
        self.db.update_contract_admin(msg.sender, msg.contract, "")

    def update_params(self, height: int) -> None:
        """Snapshot the module params at a height"""
        params = self.source.get_params(height)
        self.db.save_params(params)
        self.log_info("Stored wasm params", height=height)

    def _result_data(self, event: Event, tx: Tx) -> bytes:
        value = find_attribute(event, ATTRIBUTE_KEY_RESULT_DATA, tx.txhash)
        return decode_result_data(value, self.result_encoding, ATTRIBUTE_KEY_RESULT_DATA)
