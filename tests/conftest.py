# tests/conftest.py
"""
pytest configuration and fixtures for the wasm indexer tests
"""
import base64
from typing import Dict, List, Optional

import pytest

from wasm_indexer.database.connection import DatabaseManager
from wasm_indexer.database.interfaces import WasmStoreInterface
from wasm_indexer.database.writers.wasm_writer import WasmDatabase
from wasm_indexer.modules.wasm.module import WasmModule
from wasm_indexer.source.interfaces import ContractInfo, ContractSourceInterface
from wasm_indexer.types import (
    ACCESS_TYPE_EVERYBODY,
    AccessConfig,
    Attribute,
    Coin,
    ContractSourceError,
    DatabaseConfig,
    Event,
    MessageLog,
    MsgStoreCode,
    MsgInstantiateContract,
    MsgExecuteContract,
    MsgMigrateContract,
    MsgUpdateAdmin,
    MsgClearAdmin,
    Tx,
    WasmParams,
)

SENDER = "juno1sender0000000000000000000000000000000"
CREATOR = "juno1creator000000000000000000000000000000"
ADMIN = "juno1admin00000000000000000000000000000000"
CONTRACT = "juno14hj2tavq8fpesdwxxcu44rty3hh90vhujrvcmstl4zr3txmfvw9skjuwg8"
TX_HASH = "A1B2C3D4E5F60718293A4B5C6D7E8F90A1B2C3D4E5F60718293A4B5C6D7E8F90"
TIMESTAMP = "2023-05-01T12:00:00Z"


class FakeStore(WasmStoreInterface):
    """Records every store call as (operation, args)"""

    def __init__(self):
        self.calls: List[tuple] = []

    def save_code(self, code):
        self.calls.append(("save_code", code))

    def save_contract(self, contract):
        self.calls.append(("save_contract", contract))

    def save_execute(self, execute):
        self.calls.append(("save_execute", execute))

    def save_params(self, params):
        self.calls.append(("save_params", params))

    def update_contract_on_migrate(self, sender, contract_address, new_code_id, migrate_payload, result_data):
        self.calls.append(("update_contract_on_migrate",
                           (sender, contract_address, new_code_id, migrate_payload, result_data)))

    def update_contract_admin(self, sender, contract_address, new_admin):
        self.calls.append(("update_contract_admin", (sender, contract_address, new_admin)))

    def operations(self) -> List[str]:
        return [name for name, _ in self.calls]


class FakeSource(ContractSourceInterface):
    """Serves contract info from a dict and records lookups"""

    def __init__(self, contracts: Optional[Dict[str, ContractInfo]] = None):
        self.contracts = contracts or {}
        self.lookups: List[tuple] = []

    def get_contract_info(self, height, address):
        self.lookups.append((height, address))
        if address not in self.contracts:
            raise ContractSourceError("contract not found", {"contract_address": address, "height": height})
        return self.contracts[address]

    def get_params(self, height):
        self.lookups.append((height, "params"))
        return WasmParams(
            code_upload_access=AccessConfig(permission=ACCESS_TYPE_EVERYBODY),
            instantiate_default_permission=ACCESS_TYPE_EVERYBODY,
            max_wasm_code_size=1228800,
            height=height,
        )


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


def event(event_type: str, **attributes) -> Event:
    return Event(type=event_type, attributes=[Attribute(key=k, value=v) for k, v in attributes.items()])


def make_tx(*message_events: List[Event], height: int = 100, timestamp: str = TIMESTAMP,
            messages: Optional[list] = None, tx_hash: str = TX_HASH) -> Tx:
    """Build a transaction whose message i emitted message_events[i]"""
    logs = [MessageLog(msg_index=i, events=list(events)) for i, events in enumerate(message_events)]
    return Tx(txhash=tx_hash, height=height, timestamp=timestamp, messages=messages or [], logs=logs)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def source():
    return FakeSource({
        CONTRACT: ContractInfo(code_id=7, creator=CREATOR, admin=ADMIN, label="counter",
                               extension='{"kind":"counter"}'),
    })


@pytest.fixture
def wasm_module(source, store):
    return WasmModule(source, store)


@pytest.fixture
def store_code_msg():
    return MsgStoreCode(
        sender=SENDER,
        wasm_byte_code=b"\x00asm\x01\x00\x00\x00",
        instantiate_permission=AccessConfig(permission=ACCESS_TYPE_EVERYBODY),
    )


@pytest.fixture
def instantiate_msg():
    return MsgInstantiateContract(
        sender=SENDER,
        admin=ADMIN,
        code_id=7,
        label="counter",
        msg={"count": 0},
        funds=[Coin(denom="ujuno", amount="1000")],
    )


@pytest.fixture
def execute_msg():
    return MsgExecuteContract(
        sender=SENDER,
        contract=CONTRACT,
        msg={"increment": {}},
        funds=[],
    )


@pytest.fixture
def migrate_msg():
    return MsgMigrateContract(sender=ADMIN, contract=CONTRACT, code_id=9, msg={"migrate": {"v": 2}})


@pytest.fixture
def update_admin_msg():
    return MsgUpdateAdmin(sender=ADMIN, new_admin=SENDER, contract=CONTRACT)


@pytest.fixture
def clear_admin_msg():
    return MsgClearAdmin(sender=ADMIN, contract=CONTRACT)


@pytest.fixture
def db_manager(tmp_path):
    """SQLite-file database with the wasm tables created"""
    manager = DatabaseManager(DatabaseConfig(url=f"sqlite:///{tmp_path / 'wasm.db'}"))
    manager.initialize()
    manager.create_tables()
    yield manager
    manager.shutdown()


@pytest.fixture
def wasm_db(db_manager):
    return WasmDatabase(db_manager)
