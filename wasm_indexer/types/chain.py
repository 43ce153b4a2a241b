# wasm_indexer/types/chain.py

from typing import Any, Dict

import msgspec
from msgspec import Struct

from .new import TxHash, DateTimeStr


class Attribute(Struct):
    key: str
    value: str = ""


class Event(Struct):
    type: str
    attributes: list[Attribute] = []


class MessageLog(Struct):
    """Per-message log entry (Cosmos SDK < 0.50 tx responses)"""
    msg_index: int = 0
    log: str = ""
    events: list[Event] = []


class Coin(Struct):
    denom: str
    amount: str  # decimal string, may exceed 64 bits


class TxResponse(Struct):
    height: int
    txhash: TxHash
    timestamp: DateTimeStr
    code: int = 0
    logs: list[MessageLog] = []
    events: list[Event] = []


class Tx(Struct):
    """
    A transaction as seen by the message handlers.

    `logs` holds the per-message events of older chains; newer chains
    leave it empty and emit a flat `events` list where every event carries
    a `msg_index` attribute.
    """
    txhash: TxHash
    height: int
    timestamp: DateTimeStr
    messages: list[Any] = []
    logs: list[MessageLog] = []
    events: list[Event] = []
    code: int = 0

    def has_events(self) -> bool:
        return bool(self.logs) or bool(self.events)

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> 'Tx':
        """Build from a GetTxResponse payload ({"tx": ..., "tx_response": ...})"""
        # Imported here, messages.py depends on Coin above
        from .messages import decode_message

        if "tx_response" not in payload:
            raise ValueError("Payload has no tx_response")

        response = msgspec.convert(payload["tx_response"], type=TxResponse, strict=False)

        tx_body = (payload.get("tx") or {}).get("body") or {}
        messages = [decode_message(raw) for raw in tx_body.get("messages", [])]

        return cls(
            txhash=response.txhash,
            height=response.height,
            timestamp=response.timestamp,
            messages=messages,
            logs=response.logs,
            events=response.events,
            code=response.code,
        )
