# wasm_indexer/decode/payload.py

from datetime import datetime
import base64
import binascii
import re
from typing import Optional

from ..types import PayloadDecodeError

ENCODING_BASE64 = "base64"
ENCODING_HEX = "hex"
RESULT_ENCODINGS = (ENCODING_BASE64, ENCODING_HEX)

# code ids are stored as signed BIGINT
MAX_CODE_ID = 2 ** 63 - 1

_DECIMAL = re.compile(r"[0-9]+")

_RFC3339 = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def decode_base64(value: str, field: Optional[str] = None) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise PayloadDecodeError(f"invalid base64: {e}", field, value) from e


def decode_hex(value: str, field: Optional[str] = None) -> bytes:
    raw = value[2:] if value[:2] in ("0x", "0X") else value
    try:
        return bytes.fromhex(raw)
    except ValueError as e:
        raise PayloadDecodeError(f"invalid hex: {e}", field, value) from e


def decode_result_data(value: str, encoding: str = ENCODING_BASE64, field: Optional[str] = None) -> bytes:
    """Decode a contract result attribute into the raw bytes the contract returned"""
    if encoding == ENCODING_BASE64:
        return decode_base64(value, field)
    if encoding == ENCODING_HEX:
        return decode_hex(value, field)
    raise ValueError(f"Unsupported result encoding: {encoding}")


def parse_code_id(value: str, field: Optional[str] = None) -> int:
    """Parse a decimal code id into a non-negative signed 64-bit integer"""
    if not _DECIMAL.fullmatch(value or ""):
        raise PayloadDecodeError("code id is not a decimal integer", field, value)

    code_id = int(value)
    if code_id > MAX_CODE_ID:
        raise PayloadDecodeError("code id overflows int64", field, value)
    return code_id


def parse_timestamp(value: str, field: Optional[str] = None) -> datetime:
    """
    Parse an RFC 3339 timestamp into an aware datetime.

    The offset is mandatory. Fractional seconds are optional; anything past
    microseconds (Tendermint reports nanoseconds) is truncated.
    """
    match = _RFC3339.fullmatch(value or "")
    if not match:
        raise PayloadDecodeError("timestamp is not RFC 3339", field, value)

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    offset = match.group("offset").upper()
    if offset == "Z":
        offset = "+00:00"

    try:
        return datetime.fromisoformat(
            f"{match.group('date')}T{match.group('time')}.{fraction}{offset}"
        )
    except ValueError as e:
        raise PayloadDecodeError(f"invalid timestamp: {e}", field, value) from e
