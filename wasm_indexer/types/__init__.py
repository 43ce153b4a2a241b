# wasm_indexer/types/__init__.py

# New Types
from .new import (
    CosmosAddress,
    TxHash,
    DateTimeStr,
    ContentId,
    ACCESS_TYPE_NOBODY,
    ACCESS_TYPE_EVERYBODY,
    ACCESS_TYPE_ANY_OF_ADDRESSES,
)

# Chain Types
from .chain import (
    Attribute,
    Event,
    MessageLog,
    Coin,
    TxResponse,
    Tx,
)

# Message Types
from .messages import (
    AccessConfig,
    MsgStoreCode,
    MsgInstantiateContract,
    MsgExecuteContract,
    MsgMigrateContract,
    MsgUpdateAdmin,
    MsgClearAdmin,
    UnknownMsg,
    WasmMsg,
    WASM_MSG_TYPES,
    decode_message,
    raw_contract_message,
)

# Record Types
from .model import (
    WasmRecord,
    WasmParams,
    WasmCode,
    WasmContract,
    WasmExecuteContract,
)

# Errors
from .errors import (
    WasmIndexerError,
    LogLookupError,
    MissingEventError,
    MissingAttributeError,
    PayloadDecodeError,
    ContractSourceError,
    PersistenceError,
)

# Configuration Types
from .config import (
    DatabaseConfig,
    NodeConfig,
    WasmConfig,
    LoggingConfig,
)
