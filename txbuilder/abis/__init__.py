from txbuilder.abis.erc20 import ERC20_ABI
from txbuilder.abis.debt_token import DEBT_TOKEN_ABI
from txbuilder.abis.lending_pool import LENDING_POOL_ABI
from txbuilder.abis.weth_gateway import WETH_GATEWAY_ABI
from txbuilder.abis.adapters import LIQUIDITY_SWAP_ADAPTER_ABI, REPAY_WITH_COLLATERAL_ADAPTER_ABI
from txbuilder.abis.synthetix import SYNTHETIX_ABI

__all__ = [
    "ERC20_ABI",
    "DEBT_TOKEN_ABI",
    "LENDING_POOL_ABI",
    "WETH_GATEWAY_ABI",
    "LIQUIDITY_SWAP_ADAPTER_ABI",
    "REPAY_WITH_COLLATERAL_ADAPTER_ABI",
    "SYNTHETIX_ABI",
]
