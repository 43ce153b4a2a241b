# wasm_indexer/types/errors.py

from typing import Any, Dict, Optional


class WasmIndexerError(Exception):
    """
    Base error for the extraction pipeline.

    Every error names the stage that failed ("lookup", "decode", "source",
    "storage") and carries a context dict (tx_hash, msg_index, attribute, ...)
    that grows as the error travels up through the pipeline.
    """
    stage = "pipeline"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {
            k: v for k, v in (context or {}).items() if v is not None
        }

    def add_context(self, **context) -> 'WasmIndexerError':
        for key, value in context.items():
            if value is not None:
                self.context.setdefault(key, value)
        return self

    def __str__(self) -> str:
        if not self.context:
            return f"[{self.stage}] {self.message}"
        details = ", ".join(f"{k}={v}" for k, v in sorted(self.context.items()))
        return f"[{self.stage}] {self.message} ({details})"


class LogLookupError(WasmIndexerError, LookupError):
    stage = "lookup"


class MissingEventError(LogLookupError):
    def __init__(self, event_type: str, msg_index: int, tx_hash: Optional[str] = None):
        super().__init__(
            f"no {event_type} event found for message {msg_index}",
            {"event_type": event_type, "msg_index": msg_index, "tx_hash": tx_hash},
        )
        self.event_type = event_type


class MissingAttributeError(LogLookupError):
    def __init__(self, attribute: str, event_type: str, tx_hash: Optional[str] = None):
        super().__init__(
            f"no attribute {attribute} found inside {event_type} event",
            {"attribute": attribute, "event_type": event_type, "tx_hash": tx_hash},
        )
        self.attribute = attribute


class PayloadDecodeError(WasmIndexerError, ValueError):
    stage = "decode"

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[str] = None):
        context = {}
        if field:
            context["attribute"] = field
        if value is not None:
            context["value"] = value if len(value) <= 64 else value[:61] + "..."
        super().__init__(message, context)
        self.field = field


class ContractSourceError(WasmIndexerError):
    stage = "source"


class PersistenceError(WasmIndexerError):
    stage = "storage"
