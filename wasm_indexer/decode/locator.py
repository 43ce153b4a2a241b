# wasm_indexer/decode/locator.py
"""
Event and attribute lookup over a transaction's emitted events.

Older Cosmos SDK chains report events grouped per message under `logs`;
newer ones emit a single flat list where each event is tagged with a
`msg_index` attribute. Both layouts resolve to the events of one message.
"""
from typing import List, Optional

from ..types import Event, Tx, MissingEventError, MissingAttributeError

# x/wasm event types
EVENT_TYPE_STORE_CODE = "store_code"
EVENT_TYPE_INSTANTIATE = "instantiate"
EVENT_TYPE_EXECUTE = "execute"
EVENT_TYPE_MIGRATE = "migrate"

# x/wasm attribute keys
ATTRIBUTE_KEY_CODE_ID = "code_id"
ATTRIBUTE_KEY_CONTRACT_ADDR = "_contract_address"
ATTRIBUTE_KEY_RESULT_DATA = "result"

ATTRIBUTE_KEY_MSG_INDEX = "msg_index"


def message_events(tx: Tx, index: int) -> List[Event]:
    """Events emitted by the message at `index`, in emission order"""
    if tx.logs:
        for log in tx.logs:
            if log.msg_index == index:
                return log.events
        return []

    key = str(index)
    return [
        event for event in tx.events
        if any(attr.key == ATTRIBUTE_KEY_MSG_INDEX and attr.value == key for attr in event.attributes)
    ]


def find_event(tx: Tx, index: int, event_type: str) -> Event:
    for event in message_events(tx, index):
        if event.type == event_type:
            return event

    raise MissingEventError(event_type, index, tx.txhash)


def find_attribute(event: Event, key: str, tx_hash: Optional[str] = None) -> str:
    for attr in event.attributes:
        if attr.key == key:
            return attr.value

    raise MissingAttributeError(key, event.type, tx_hash)
