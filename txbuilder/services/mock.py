# /txbuilder/services/mock.py
# Test doubles for the external capabilities the lending pool service reads from.
# Call data is still encoded by real web3 contract objects; only reads and
# gas estimation are canned.

from typing import Any, Dict, List, Tuple

from web3 import AsyncHTTPProvider, AsyncWeb3

from txbuilder.abis import LENDING_POOL_ABI
from txbuilder.core.constants import ProtocolAction
from txbuilder.core.contracts import Web3ContractInterface
from txbuilder.core.logger import get_logger
from txbuilder.core.tx import GasEstimate

log = get_logger(__name__)


def _key(address: str, method: str, args: tuple) -> Tuple[str, str, tuple]:
    return (address.lower(), method, tuple(a.lower() if isinstance(a, str) else a for a in args))


class MockContractInterface(Web3ContractInterface):
    """
    Encodes with web3 but answers read calls from a table.

    Never connects: the provider URL is only there so web3 can be constructed.
    """
    def __init__(self):
        super().__init__(AsyncWeb3(AsyncHTTPProvider("http://127.0.0.1:8545")))
        self.responses: Dict[Tuple[str, str, tuple], Any] = {}
        self.reads: List[Tuple[str, str, tuple]] = []
        self._failures: Dict[Tuple[str, str, tuple], Exception] = {}

    def set_response(self, address: str, method: str, value: Any, *args):
        self.responses[_key(address, method, args)] = value

    def set_failure(self, address: str, method: str, error: Exception, *args):
        self._failures[_key(address, method, args)] = error

    def set_decimals(self, token: str, decimals: int):
        self.set_response(token, "decimals", decimals)

    def set_allowance(self, token: str, owner: str, spender: str, amount: int):
        self.set_response(token, "allowance", amount, owner, spender)

    def set_balance(self, token: str, owner: str, amount: int):
        self.set_response(token, "balanceOf", amount, owner)

    def set_borrow_allowance(self, debt_token: str, owner: str, delegatee: str, amount: int):
        self.set_response(debt_token, "borrowAllowance", amount, owner, delegatee)

    def set_premium(self, lending_pool: str, premium_bps: int):
        self.set_response(lending_pool, "FLASHLOAN_PREMIUM_TOTAL", premium_bps)

    def decode(self, address: str, abi: List[dict], data: str):
        """Returns (method name, args dict) for call data built by this interface."""
        fn, args = self.contract(address, abi).decode_function_input(data)
        return fn.fn_name, args

    def decode_pool_call(self, lending_pool: str, data: str):
        return self.decode(lending_pool, LENDING_POOL_ABI, data)

    async def call(self, address: str, abi: List[dict], method: str, *args) -> Any:
        key = _key(address, method, args)
        self.reads.append(key)
        if key in self._failures:
            raise self._failures[key]
        if key not in self.responses:
            raise ValueError(f"No mock response set for {method}{args} on {address}")
        return self.responses[key]


class MockGasEstimator:
    """Records every forwarded estimate request and returns a fixed estimate."""
    def __init__(self, gas_limit: int = 100_000, gas_price: int = 1):
        self.gas_limit = gas_limit
        self.gas_price = gas_price
        self.requests: List[Tuple[List[dict], dict, ProtocolAction]] = []

    async def estimate(self, prior, tx, action=ProtocolAction.default) -> GasEstimate:
        self.requests.append((prior, tx, action))
        return GasEstimate(gas_limit=self.gas_limit, gas_price=self.gas_price)


class MockBalanceValidator:
    def __init__(self, result: bool = True):
        self.result = result
        self.calls: List[Tuple[str, str, str]] = []

    async def validate(self, user: str, reserve: str, amount: str) -> bool:
        self.calls.append((user, reserve, amount))
        return self.result
