# wasm_indexer/types/messages.py
"""
x/wasm message variants as rendered by the Cosmos REST gateway.

Each message is keyed on its proto type URL ("@type"). Messages of any other
module decode to UnknownMsg so callers can skip them without special casing.
"""
from typing import Any, Dict, Optional, Union

import msgspec
from msgspec import Struct

from .chain import Coin
from .new import CosmosAddress


class AccessConfig(Struct):
    permission: str
    address: str = ""  # deprecated single address form
    addresses: list[str] = []


class MsgStoreCode(Struct, tag="/cosmwasm.wasm.v1.MsgStoreCode", tag_field="@type"):
    sender: CosmosAddress
    wasm_byte_code: bytes
    instantiate_permission: Optional[AccessConfig] = None


class MsgInstantiateContract(Struct, tag="/cosmwasm.wasm.v1.MsgInstantiateContract", tag_field="@type"):
    sender: CosmosAddress
    code_id: int
    label: str
    msg: Any
    admin: str = ""
    funds: list[Coin] = []


class MsgExecuteContract(Struct, tag="/cosmwasm.wasm.v1.MsgExecuteContract", tag_field="@type"):
    sender: CosmosAddress
    contract: CosmosAddress
    msg: Any
    funds: list[Coin] = []


class MsgMigrateContract(Struct, tag="/cosmwasm.wasm.v1.MsgMigrateContract", tag_field="@type"):
    sender: CosmosAddress
    contract: CosmosAddress
    code_id: int
    msg: Any


class MsgUpdateAdmin(Struct, tag="/cosmwasm.wasm.v1.MsgUpdateAdmin", tag_field="@type"):
    sender: CosmosAddress
    new_admin: CosmosAddress
    contract: CosmosAddress


class MsgClearAdmin(Struct, tag="/cosmwasm.wasm.v1.MsgClearAdmin", tag_field="@type"):
    sender: CosmosAddress
    contract: CosmosAddress


class UnknownMsg(Struct):
    type_url: str
    value: Dict[str, Any] = {}


WasmMsg = Union[
    MsgStoreCode,
    MsgInstantiateContract,
    MsgExecuteContract,
    MsgMigrateContract,
    MsgUpdateAdmin,
    MsgClearAdmin,
]

WASM_MSG_TYPES = {
    cls.__struct_config__.tag: cls
    for cls in (MsgStoreCode, MsgInstantiateContract, MsgExecuteContract,
                MsgMigrateContract, MsgUpdateAdmin, MsgClearAdmin)
}


def decode_message(raw: Dict[str, Any]) -> Union[WasmMsg, UnknownMsg]:
    """Convert a JSON message object into its typed variant"""
    type_url = raw.get("@type", "")
    if type_url not in WASM_MSG_TYPES:
        return UnknownMsg(type_url=type_url, value=raw)

    # strict=False lets uint64 fields arrive as strings, as proto JSON renders them
    return msgspec.convert(raw, type=WasmMsg, strict=False)


def raw_contract_message(msg: Union[MsgInstantiateContract, MsgExecuteContract, MsgMigrateContract]) -> bytes:
    """Contract payload as compact JSON bytes"""
    if isinstance(msg.msg, (bytes, bytearray)):
        return bytes(msg.msg)
    return msgspec.json.encode(msg.msg)
