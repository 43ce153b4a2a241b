# wasm_indexer/source/remote.py

from typing import Any, Dict, Optional

import msgspec
import requests

from ..core.logging import LoggingMixin
from ..types import AccessConfig, ContractSourceError, CosmosAddress, WasmParams
from .interfaces import ContractInfo, ContractSourceInterface

HEIGHT_HEADER = "x-cosmos-block-height"


class LcdContractSource(ContractSourceInterface, LoggingMixin):
    """
    Reads x/wasm state from a node's REST (LCD) gateway, pinned to a height.

    Every call goes to the node; nothing is cached and failures are not retried.
    """

    def __init__(self, lcd_url: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.lcd_url = lcd_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        self.log_info("LcdContractSource initialized", lcd_url=self.lcd_url)

    def get_contract_info(self, height: int, address: CosmosAddress) -> ContractInfo:
        payload = self._get(f"/cosmwasm/wasm/v1/contract/{address}", height,
                            contract_address=address)

        info = payload.get("contract_info")
        if not info:
            raise ContractSourceError("response has no contract_info",
                                      {"contract_address": address, "height": height})

        try:
            code_id = int(info["code_id"])
            creator = info["creator"]
        except (KeyError, TypeError, ValueError) as e:
            raise ContractSourceError(f"malformed contract_info: {e}",
                                      {"contract_address": address, "height": height}) from e

        extension = info.get("extension")
        return ContractInfo(
            code_id=code_id,
            creator=creator,
            admin=info.get("admin") or "",
            label=info.get("label") or "",
            extension=msgspec.json.encode(extension).decode() if extension else "",
        )

    def get_params(self, height: int) -> WasmParams:
        payload = self._get("/cosmwasm/wasm/v1/codes/params", height)

        params = payload.get("params")
        if not params:
            raise ContractSourceError("response has no params", {"height": height})

        try:
            upload_access = params.get("code_upload_access")
            max_code_size = params.get("max_wasm_code_size")
            return WasmParams(
                code_upload_access=msgspec.convert(upload_access, type=AccessConfig) if upload_access else None,
                instantiate_default_permission=params["instantiate_default_permission"],
                max_wasm_code_size=int(max_code_size) if max_code_size is not None else None,
                height=height,
            )
        except (KeyError, TypeError, ValueError, msgspec.ValidationError) as e:
            raise ContractSourceError(f"malformed params: {e}", {"height": height}) from e

    def _get(self, path: str, height: int, **context) -> Dict[str, Any]:
        url = f"{self.lcd_url}{path}"
        context["height"] = height

        self.log_debug("Querying LCD", url=url, **context)

        try:
            resp = self.session.get(url, headers={HEIGHT_HEADER: str(height)}, timeout=self.timeout)
        except requests.RequestException as e:
            raise ContractSourceError(f"request to {url} failed: {e}", context) from e

        if resp.status_code == 404:
            raise ContractSourceError(f"not found at {url}", context)

        try:
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            raise ContractSourceError(f"node returned {resp.status_code} for {url}", context) from e
        except ValueError as e:
            raise ContractSourceError(f"invalid JSON from {url}: {e}", context) from e
