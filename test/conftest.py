import pytest

from txbuilder.core.addresses import MarketAddresses
from txbuilder.services.lending_pool import create_lending_pool
from txbuilder.services.mock import MockBalanceValidator, MockContractInterface, MockGasEstimator

LENDING_POOL = "0x7d2768dE32b0b80b7a3454c06BdAc94A69DDc7A9"
WETH_GATEWAY = "0x2222222222222222222222222222222222222222"
SWAP_ADAPTER = "0x3333333333333333333333333333333333333333"
REPAY_ADAPTER = "0x4444444444444444444444444444444444444444"
FLASH_LIQUIDATION_ADAPTER = "0x5555555555555555555555555555555555555555"


@pytest.fixture
def market():
    return MarketAddresses(
        lending_pool=LENDING_POOL,
        weth_gateway=WETH_GATEWAY,
        swap_collateral_adapter=SWAP_ADAPTER,
        repay_with_collateral_adapter=REPAY_ADAPTER,
        flash_liquidation_adapter=FLASH_LIQUIDATION_ADAPTER,
    )


@pytest.fixture
def contracts():
    return MockContractInterface()


@pytest.fixture
def estimator():
    return MockGasEstimator()


@pytest.fixture
def balance():
    return MockBalanceValidator(result=True)


@pytest.fixture
def pool(contracts, estimator, balance, market):
    return create_lending_pool(contracts, estimator, market, balance_validator=balance)
