# /txbuilder/core/contracts.py
# Contract-call capability: encodes call data and performs read calls.
from typing import Any, List, Protocol

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.contract.async_contract import AsyncContract

from txbuilder.core.config import settings
from txbuilder.core.logger import get_logger

log = get_logger(__name__)


def to_checksum(address: str) -> str:
    return Web3.to_checksum_address(address)


class ContractInterface(Protocol):
    def encode(self, address: str, abi: List[dict], method: str, *args) -> str:
        ...

    async def call(self, address: str, abi: List[dict], method: str, *args) -> Any:
        ...


class Web3ContractInterface:
    """ContractInterface backed by web3 async contract objects."""
    def __init__(self, w3: AsyncWeb3):
        self.w3 = w3

    @classmethod
    def from_settings(cls) -> "Web3ContractInterface":
        if settings.RPC_URL is None:
            raise ValueError("RPC_URL is not configured")
        w3 = AsyncWeb3(AsyncHTTPProvider(settings.RPC_URL.get_secret_value(), request_kwargs={"timeout": 10}))
        return cls(w3)

    def contract(self, address: str, abi: List[dict]) -> AsyncContract:
        return self.w3.eth.contract(address=to_checksum(address), abi=abi)

    def encode(self, address: str, abi: List[dict], method: str, *args) -> str:
        fn = getattr(self.contract(address, abi).functions, method)
        return fn(*args)._encode_transaction_data()

    async def call(self, address: str, abi: List[dict], method: str, *args) -> Any:
        fn = getattr(self.contract(address, abi).functions, method)
        try:
            return await fn(*args).call()
        except Exception as e:
            log.error("CONTRACT_READ_FAILED", address=address, method=method, error=str(e))
            raise
