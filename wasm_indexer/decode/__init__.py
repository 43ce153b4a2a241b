# wasm_indexer/decode/__init__.py

from .locator import (
    EVENT_TYPE_STORE_CODE,
    EVENT_TYPE_INSTANTIATE,
    EVENT_TYPE_EXECUTE,
    EVENT_TYPE_MIGRATE,
    ATTRIBUTE_KEY_CODE_ID,
    ATTRIBUTE_KEY_CONTRACT_ADDR,
    ATTRIBUTE_KEY_RESULT_DATA,
    message_events,
    find_event,
    find_attribute,
)
from .payload import (
    ENCODING_BASE64,
    ENCODING_HEX,
    RESULT_ENCODINGS,
    decode_base64,
    decode_hex,
    decode_result_data,
    parse_code_id,
    parse_timestamp,
)
