PARAMS = {
    "base": {
        # vault
        "DEFAULT_MAX_TOTAL_ASSETS": 10_000_000,  # whole asset units, advisory only
        # simulation
        "START_TIMESTAMP": 1_735_689_600,
    },
    "local": {
        # vault
        "DEFAULT_MAX_TOTAL_ASSETS": 1_000_000,  # whole asset units, advisory only
        # simulation
        "START_TIMESTAMP": 1_735_689_600,
    },
}


TOKENS = {
    "base": {
        "USDC": {"name": "USD Coin", "symbol": "USDC", "decimals": 6},
        "WETH": {"name": "Wrapped Ether", "symbol": "WETH", "decimals": 18},
        "CBBTC": {"name": "Coinbase Wrapped BTC", "symbol": "cbBTC", "decimals": 8},
    },
    "local": {
        "ALPHA": {"name": "Alpha Token", "symbol": "ALPHA", "decimals": 18},
        "BRAVO": {"name": "Bravo Token", "symbol": "BRAVO", "decimals": 18},
        "CHARLIE": {"name": "Charlie Token", "symbol": "CHARLIE", "decimals": 6},
    },
}


VAULT_INFO = {
    "USDC": {
        "name": "Undy USDC Share Vault",
        "symbol": "undyUSDC",
    },
    "WETH": {
        "name": "Undy WETH Share Vault",
        "symbol": "undyETH",
    },
    "CBBTC": {
        "name": "Undy cbBTC Share Vault",
        "symbol": "undyBTC",
    },
    "ALPHA": {
        "name": "Alpha Share Vault",
        "symbol": "svALPHA",
    },
    "BRAVO": {
        "name": "Bravo Share Vault",
        "symbol": "svBRAVO",
    },
    "CHARLIE": {
        "name": "Charlie Share Vault",
        "symbol": "svCHARLIE",
    },
}
