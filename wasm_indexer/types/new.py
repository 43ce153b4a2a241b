# wasm_indexer/types/new.py

from typing import NewType


CosmosAddress = NewType('CosmosAddress', str)  # bech32, e.g. juno1...
TxHash = NewType('TxHash', str)                # upper-case hex as reported by the node
DateTimeStr = NewType('DateTimeStr', str)      # RFC 3339
ContentId = NewType('ContentId', str)

# AccessType names as rendered by the REST gateway
ACCESS_TYPE_NOBODY = "ACCESS_TYPE_NOBODY"
ACCESS_TYPE_EVERYBODY = "ACCESS_TYPE_EVERYBODY"
ACCESS_TYPE_ANY_OF_ADDRESSES = "ACCESS_TYPE_ANY_OF_ADDRESSES"
