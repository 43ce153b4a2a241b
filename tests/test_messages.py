# tests/test_messages.py

import base64

import msgspec
import pytest

from wasm_indexer.types import (
    MsgClearAdmin,
    MsgExecuteContract,
    MsgInstantiateContract,
    MsgMigrateContract,
    MsgStoreCode,
    MsgUpdateAdmin,
    Tx,
    UnknownMsg,
    decode_message,
    raw_contract_message,
)

from conftest import ADMIN, CONTRACT, SENDER, TX_HASH


def tx_response_payload(messages, logs=None, events=None):
    return {
        "tx": {"body": {"messages": messages}},
        "tx_response": {
            "height": "1200",
            "txhash": TX_HASH,
            "timestamp": "2023-05-01T12:00:00Z",
            "code": 0,
            "logs": logs or [],
            "events": events or [],
        },
    }


def test_decode_store_code_message():
    wasm = b"\x00asm\x01\x00\x00\x00"

    msg = decode_message({
        "@type": "/cosmwasm.wasm.v1.MsgStoreCode",
        "sender": SENDER,
        "wasm_byte_code": base64.b64encode(wasm).decode(),
        "instantiate_permission": {"permission": "Everybody", "addresses": []},
    })

    assert isinstance(msg, MsgStoreCode)
    assert msg.wasm_byte_code == wasm
    assert msg.instantiate_permission.permission == "Everybody"


def test_decode_instantiate_message_accepts_string_code_id():
    msg = decode_message({
        "@type": "/cosmwasm.wasm.v1.MsgInstantiateContract",
        "sender": SENDER,
        "admin": ADMIN,
        "code_id": "7",
        "label": "counter",
        "msg": {"count": 0},
        "funds": [{"denom": "ujuno", "amount": "1000"}],
    })

    assert isinstance(msg, MsgInstantiateContract)
    assert msg.code_id == 7
    assert msg.funds[0].amount == "1000"


@pytest.mark.parametrize("raw, expected", [
    ({"@type": "/cosmwasm.wasm.v1.MsgExecuteContract", "sender": SENDER, "contract": CONTRACT,
      "msg": {"increment": {}}}, MsgExecuteContract),
    ({"@type": "/cosmwasm.wasm.v1.MsgMigrateContract", "sender": ADMIN, "contract": CONTRACT,
      "code_id": "9", "msg": {}}, MsgMigrateContract),
    ({"@type": "/cosmwasm.wasm.v1.MsgUpdateAdmin", "sender": ADMIN, "new_admin": SENDER,
      "contract": CONTRACT}, MsgUpdateAdmin),
    ({"@type": "/cosmwasm.wasm.v1.MsgClearAdmin", "sender": ADMIN, "contract": CONTRACT}, MsgClearAdmin),
])
def test_decode_other_wasm_messages(raw, expected):
    assert isinstance(decode_message(raw), expected)


def test_decode_non_wasm_message_is_unknown():
    raw = {"@type": "/cosmos.bank.v1beta1.MsgSend", "from_address": SENDER, "amount": []}

    msg = decode_message(raw)

    assert isinstance(msg, UnknownMsg)
    assert msg.type_url == "/cosmos.bank.v1beta1.MsgSend"


def test_decode_wasm_message_missing_field_fails():
    with pytest.raises(msgspec.ValidationError):
        decode_message({"@type": "/cosmwasm.wasm.v1.MsgClearAdmin", "sender": ADMIN})


def test_raw_contract_message_is_compact_json():
    msg = MsgExecuteContract(sender=SENDER, contract=CONTRACT, msg={"transfer": {"amount": "5"}})

    assert raw_contract_message(msg) == b'{"transfer":{"amount":"5"}}'


def test_raw_contract_message_keeps_bytes():
    msg = MsgMigrateContract(sender=ADMIN, contract=CONTRACT, code_id=2, msg=b'{"a":1}')

    assert raw_contract_message(msg) == b'{"a":1}'


def test_tx_from_response():
    payload = tx_response_payload(
        messages=[
            {"@type": "/cosmos.bank.v1beta1.MsgSend", "from_address": SENDER},
            {"@type": "/cosmwasm.wasm.v1.MsgClearAdmin", "sender": ADMIN, "contract": CONTRACT},
        ],
        logs=[{"msg_index": 1, "events": [{"type": "wasm", "attributes": [
            {"key": "_contract_address", "value": CONTRACT}]}]}],
    )

    tx = Tx.from_response(payload)

    assert tx.txhash == TX_HASH
    assert tx.height == 1200
    assert isinstance(tx.messages[0], UnknownMsg)
    assert isinstance(tx.messages[1], MsgClearAdmin)
    assert tx.logs[0].msg_index == 1
    assert tx.has_events()


def test_tx_from_response_without_events():
    tx = Tx.from_response(tx_response_payload(messages=[]))

    assert tx.messages == []
    assert not tx.has_events()


def test_tx_from_response_requires_tx_response():
    with pytest.raises(ValueError, match="tx_response"):
        Tx.from_response({"tx": {}})
