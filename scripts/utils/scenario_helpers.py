import os
from eth_account import Account
import dotenv

from scripts.utils import log
from sharevault.constants import MAX_UINT256

dotenv.load_dotenv()

SCENARIOS_DIR = "./scenarios"

# well known dev key, only used when no `<NAME>_PRIVATE_KEY` is configured
TEST_PRIVATE_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'


def load_scenario_files(directory):
    """
    Returns `{timestamp: path}` for every scenario file in `directory`.
    Scenario filenames start with a numeric timestamp that orders them.
    """
    scenario_files = {}
    if not os.path.exists(directory):
        return scenario_files

    for file in os.listdir(directory):
        if not file.endswith(".json"):
            continue
        prefix = file.split("-", 1)[0]
        if prefix.isdigit():
            scenario_files[int(prefix)] = os.path.relpath(os.path.join(directory, file))

    return dict(sorted(scenario_files.items()))


def get_account(accountName):
    log.h1(f'Connecting to account {accountName}')

    accountKey = os.environ.get(f'{accountName}_PRIVATE_KEY')
    account = Account.from_key(
        accountKey if accountKey else TEST_PRIVATE_KEY)
    log.h2(f'Account {accountName} connected')

    return account


def parse_amount(value, decimals):
    """
    Scenario amounts are raw integers, or `"units:<n>"` for `n` whole tokens.
    `"max"` maps to the unlimited allowance sentinel.
    """
    if isinstance(value, int):
        return value
    if value == "max":
        return MAX_UINT256
    if isinstance(value, str) and value.startswith("units:"):
        return int(value[len("units:"):]) * 10 ** decimals
    raise ValueError(f"invalid amount `{value}`")
