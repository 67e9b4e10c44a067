# /txbuilder/abis/weth_gateway.py
WETH_GATEWAY_ABI = [
    {"inputs": [{"internalType": "address", "name": "lendingPool", "type": "address"}, {"internalType": "address", "name": "onBehalfOf", "type": "address"}, {"internalType": "uint16", "name": "referralCode", "type": "uint16"}], "name": "depositETH", "outputs": [], "stateMutability": "payable", "type": "function"},
    {"inputs": [{"internalType": "address", "name": "lendingPool", "type": "address"}, {"internalType": "uint256", "name": "amount", "type": "uint256"}, {"internalType": "address", "name": "to", "type": "address"}], "name": "withdrawETH", "outputs": [], "stateMutability": "nonpayable", "type": "function"},
    {"inputs": [{"internalType": "address", "name": "lendingPool", "type": "address"}, {"internalType": "uint256", "name": "amount", "type": "uint256"}, {"internalType": "uint256", "name": "rateMode", "type": "uint256"}, {"internalType": "address", "name": "onBehalfOf", "type": "address"}], "name": "repayETH", "outputs": [], "stateMutability": "payable", "type": "function"},
    {"inputs": [{"internalType": "address", "name": "lendingPool", "type": "address"}, {"internalType": "uint256", "name": "amount", "type": "uint256"}, {"internalType": "uint256", "name": "interesRateMode", "type": "uint256"}, {"internalType": "uint16", "name": "referralCode", "type": "uint16"}], "name": "borrowETH", "outputs": [], "stateMutability": "nonpayable", "type": "function"},
]
