# /txbuilder/abis/synthetix.py
SYNTHETIX_ABI = [
    {"inputs": [{"internalType": "address", "name": "account", "type": "address"}], "name": "transferableSynthetix", "outputs": [{"internalType": "uint256", "name": "transferable", "type": "uint256"}], "stateMutability": "view", "type": "function"},
]
