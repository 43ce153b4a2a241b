# wasm_indexer/types/model/wasm.py

from datetime import datetime
from typing import Any, Dict, Optional
import hashlib

import msgspec
from msgspec import Struct

from ..chain import Coin
from ..messages import (
    AccessConfig,
    MsgStoreCode,
    MsgInstantiateContract,
    MsgExecuteContract,
    raw_contract_message,
)
from ..new import CosmosAddress, ContentId, TxHash


class WasmRecord(Struct, frozen=True, kw_only=True):
    ''' Base class for x/wasm records. Every record carries the height it was produced at. '''
    height: int

    def to_dict(self) -> Dict[str, Any]:
        return msgspec.structs.asdict(self)


class WasmParams(WasmRecord, frozen=True, kw_only=True):
    code_upload_access: Optional[AccessConfig]
    instantiate_default_permission: str
    max_wasm_code_size: Optional[int] = None


class WasmCode(WasmRecord, frozen=True, kw_only=True):
    sender: CosmosAddress
    byte_code: bytes
    instantiate_permission: Optional[AccessConfig]
    code_id: int

    @classmethod
    def from_msg(cls, msg: MsgStoreCode, code_id: int, height: int) -> 'WasmCode':
        return cls(
            sender=msg.sender,
            byte_code=msg.wasm_byte_code,
            instantiate_permission=msg.instantiate_permission,
            code_id=code_id,
            height=height,
        )


class WasmContract(WasmRecord, frozen=True, kw_only=True):
    sender: CosmosAddress
    creator: CosmosAddress
    admin: str  # empty when the contract has no admin
    code_id: int
    label: str
    raw_contract_message: bytes
    funds: tuple[Coin, ...]
    contract_address: CosmosAddress
    data: bytes  # raw result data, often protobuf
    instantiated_at: datetime
    contract_info_extension: str

    @classmethod
    def from_msg(
        cls,
        msg: MsgInstantiateContract,
        contract_address: CosmosAddress,
        data: bytes,
        instantiated_at: datetime,
        creator: CosmosAddress,
        contract_info_extension: str,
        height: int,
    ) -> 'WasmContract':
        return cls(
            sender=msg.sender,
            creator=creator,
            admin=msg.admin,
            code_id=msg.code_id,
            label=msg.label,
            raw_contract_message=raw_contract_message(msg),
            funds=tuple(msg.funds),
            contract_address=contract_address,
            data=data,
            instantiated_at=instantiated_at,
            contract_info_extension=contract_info_extension,
            height=height,
        )


class WasmExecuteContract(WasmRecord, frozen=True, kw_only=True):
    sender: CosmosAddress
    contract_address: CosmosAddress
    raw_contract_message: bytes
    funds: tuple[Coin, ...]
    data: bytes
    executed_at: datetime
    tx_hash: TxHash
    msg_index: int

    @classmethod
    def from_msg(
        cls,
        msg: MsgExecuteContract,
        data: bytes,
        executed_at: datetime,
        height: int,
        tx_hash: TxHash,
        msg_index: int,
    ) -> 'WasmExecuteContract':
        return cls(
            sender=msg.sender,
            contract_address=msg.contract,
            raw_contract_message=raw_contract_message(msg),
            funds=tuple(msg.funds),
            data=data,
            executed_at=executed_at,
            tx_hash=tx_hash,
            msg_index=msg_index,
            height=height,
        )

    @property
    def content_id(self) -> ContentId:
        content_bytes = msgspec.msgpack.encode({
            "tx_hash": self.tx_hash,
            "msg_index": self.msg_index,
            "contract_address": self.contract_address,
        })
        return ContentId(hashlib.sha256(content_bytes).hexdigest()[:16])
