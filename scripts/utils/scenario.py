from sharevault import Env, MockErc20, ShareVault, reverts
from scripts.utils import log
from scripts.utils.deploy_args import DeployArgs
from scripts.utils.scenario_helpers import parse_amount


# vault entry points a scenario step may call, with the positions of their amount args
VAULT_ACTIONS = {
    "deposit": (0,),
    "mint": (0,),
    "withdraw": (0,),
    "redeem": (0,),
    "transfer": (1,),
    "transferFrom": (2,),
    "approve": (1,),
    "increaseAllowance": (1,),
    "decreaseAllowance": (1,),
    "pause": (),
    "unpause": (),
    "setMaxTotalAssets": (0,),
    "transferOwnership": (),
}


class Scenario:
    """
    One scenario file replayed against a fresh environment: a vault over a
    mock asset, a governance minter and a set of labelled accounts.
    """

    def __init__(self, deploy_args: DeployArgs, config, timestamp):
        self._deploy_args = deploy_args
        self._config = config
        self._timestamp = timestamp
        self._steps = 0
        blueprint = deploy_args.blueprint

        self.env = Env(timestamp=blueprint.PARAMS["START_TIMESTAMP"], eoa=deploy_args.sender.address)
        self.governance = self.env.generate_address("governance")

        self.asset_key = config.get("asset", next(iter(blueprint.TOKENS)))
        token = blueprint.token(self.asset_key)
        self.asset = MockErc20(self.env, self.governance, token["name"], token["symbol"], token["decimals"])
        self.decimals = token["decimals"]

        info = blueprint.vault_info(self.asset_key)
        self.vault = ShareVault(
            self.env,
            self.asset,
            info["name"],
            info["symbol"],
            maxTotalAssets=blueprint.units(self.asset_key, blueprint.PARAMS["DEFAULT_MAX_TOTAL_ASSETS"]),
        )

        # stray tokens that can be airdropped to the vault and swept
        self.tokens = {}
        for key in config.get("strays", []):
            stray = blueprint.token(key)
            self.tokens[key] = MockErc20(self.env, self.governance, stray["name"], stray["symbol"], stray["decimals"])

        self.accounts = {"owner": self.env.eoa, "vault": self.vault.address, "governance": self.governance}
        for label in config.get("accounts", []):
            self.accounts[label] = self.env.generate_address(label)

        for label, amount in config.get("fund", {}).items():
            self.asset.mint(self.resolve(label), parse_amount(amount, self.decimals), sender=self.governance)
            # holders pre-approve the vault so deposit/mint steps stay short
            self.asset.approve(self.vault, parse_amount("max", self.decimals), sender=self.resolve(label))

    def resolve(self, value):
        if isinstance(value, str) and value in self.accounts:
            return self.accounts[value]
        return value

    def run(self):
        for index, step in enumerate(self._config.get("steps", [])):
            self.execute(index, step)
            self._steps += 1
        return self.manifest()

    def execute(self, index, step):
        action = step["action"]
        sender = self.resolve(step.get("sender", "owner"))
        args = [self.resolve(arg) for arg in step.get("args", [])]
        expected_revert = step.get("reverts")

        log.h3(f"[{index}] {action} {step.get('args', [])} from {step.get('sender', 'owner')}")

        if expected_revert:
            with reverts(expected_revert):
                self._call(action, args, sender)
            log.warn(f"reverted as expected: {expected_revert}")
            return None

        tx_count = self.env.tx_count
        result = self._call(action, args, sender)
        if self.env.tx_count == tx_count:
            # nothing was executed, logs still belong to the previous step
            return result
        for contract in (self.vault, self.asset, *self.tokens.values()):
            for evt in contract.get_logs():
                log.event(evt)
        return result

    def _call(self, action, args, sender):
        if action in VAULT_ACTIONS:
            for position in VAULT_ACTIONS[action]:
                args[position] = parse_amount(args[position], self.decimals)
            return getattr(self.vault, action)(*args, sender=sender)

        if action == "yield":
            # external balance increase, nobody receives shares for it
            amount = parse_amount(args[0], self.decimals)
            return self.asset.mint(self.vault, amount, sender=self.governance)

        if action == "loss":
            amount = parse_amount(args[0], self.decimals)
            return self.asset.transfer(self.governance, amount, sender=self.vault.address)

        if action == "airdrop":
            token = self._token(args[0])
            return token.mint(self.vault, parse_amount(args[1], token.decimals()), sender=self.governance)

        if action == "sweep":
            return self.vault.sweep(self._token(args[0]), args[1], sender=sender)

        if action == "time_travel":
            return self.env.time_travel(int(args[0]))

        raise ValueError(f"unknown scenario action `{action}`")

    def _token(self, key):
        if key == self.asset_key:
            return self.asset
        if key not in self.tokens:
            raise ValueError(f"unknown scenario token `{key}`")
        return self.tokens[key]

    def manifest(self):
        labels = {address: label for label, address in self.accounts.items()}
        return {
            "timestamp": self._timestamp,
            "blueprint": self._deploy_args.blueprint.blueprint,
            "steps": self._steps,
            "vault": {
                "address": self.vault.address,
                "name": self.vault.name(),
                "symbol": self.vault.symbol(),
                "asset": self.vault.asset(),
                "owner": self.vault.owner(),
                "paused": self.vault.isPaused(),
                "maxTotalAssets": str(self.vault.maxTotalAssets()),
                "totalAssets": str(self.vault.totalAssets()),
                "totalSupply": str(self.vault.totalSupply()),
            },
            "holders": {
                labels.get(holder, holder): str(shares)
                for holder, shares in self.vault.ledger.holders()
            },
            "events": [
                {k: str(v) if isinstance(v, int) else v for k, v in evt.to_dict().items()}
                for evt in self.vault.events
            ],
        }
