from config.BluePrint import PARAMS, TOKENS, VAULT_INFO


class BluePrint:
    def __init__(self, blueprint):
        if blueprint not in PARAMS:
            raise ValueError(f"unknown blueprint `{blueprint}` (expected one of {sorted(PARAMS)})")
        self.blueprint = blueprint
        self.PARAMS = PARAMS[blueprint]
        self.TOKENS = TOKENS[blueprint]
        self.VAULT_INFO = VAULT_INFO

    def token(self, key):
        return self.TOKENS[key]

    def vault_info(self, key):
        return self.VAULT_INFO[key]

    def units(self, key, amount):
        # whole token units -> raw integer amount
        return amount * 10 ** self.TOKENS[key]["decimals"]


class DeployArgs:
    def __init__(self, sender, blueprint):
        self.sender = sender
        self.blueprint = BluePrint(blueprint)

    def __repr__(self):
        return f"DeployArgs(sender={self.sender.address}, blueprint={self.blueprint.blueprint})"
