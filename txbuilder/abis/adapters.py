# /txbuilder/abis/adapters.py
# Swap-collateral and repay-with-collateral adapters (direct, non-flash entry points).
_PERMIT_COMPONENTS = [
    {"internalType": "uint256", "name": "amount", "type": "uint256"},
    {"internalType": "uint256", "name": "deadline", "type": "uint256"},
    {"internalType": "uint8", "name": "v", "type": "uint8"},
    {"internalType": "bytes32", "name": "r", "type": "bytes32"},
    {"internalType": "bytes32", "name": "s", "type": "bytes32"},
]

LIQUIDITY_SWAP_ADAPTER_ABI = [
    {"inputs": [{"internalType": "address[]", "name": "assetToSwapFromList", "type": "address[]"}, {"internalType": "address[]", "name": "assetToSwapToList", "type": "address[]"}, {"internalType": "uint256[]", "name": "amountToSwapList", "type": "uint256[]"}, {"internalType": "uint256[]", "name": "minAmountsToReceive", "type": "uint256[]"}, {"components": _PERMIT_COMPONENTS, "internalType": "struct IBaseUniswapAdapter.PermitSignature[]", "name": "permitParams", "type": "tuple[]"}, {"internalType": "bool[]", "name": "useEthPath", "type": "bool[]"}], "name": "swapAndDeposit", "outputs": [], "stateMutability": "nonpayable", "type": "function"},
]

REPAY_WITH_COLLATERAL_ADAPTER_ABI = [
    {"inputs": [{"internalType": "address", "name": "collateralAsset", "type": "address"}, {"internalType": "address", "name": "debtAsset", "type": "address"}, {"internalType": "uint256", "name": "collateralAmount", "type": "uint256"}, {"internalType": "uint256", "name": "debtRepayAmount", "type": "uint256"}, {"internalType": "uint256", "name": "debtRateMode", "type": "uint256"}, {"components": _PERMIT_COMPONENTS, "internalType": "struct IBaseUniswapAdapter.PermitSignature", "name": "permitSignature", "type": "tuple"}, {"internalType": "bool", "name": "useEthPath", "type": "bool"}], "name": "swapAndRepay", "outputs": [], "stateMutability": "nonpayable", "type": "function"},
]
