import click

from scripts.utils import log
from scripts.utils.scenario_helpers import SCENARIOS_DIR, get_account
from scripts.utils.scenario_runner import ScenarioRunner
from scripts.utils.deploy_args import DeployArgs


SCENARIO_HISTORY_DIR = "./scenario_history"


CLICK_PROMPTS = {
    "blueprint": {
        "prompt": "Blueprint",
        "default": "local",
        "help": "Blueprint whose params and tokens the scenarios use (local, base). Defaults to `local`.",
        "type": click.Choice(["local", "base"], case_sensitive=False),
    },
    "start_timestamp": {
        "prompt": "Start timestamp",
        "default": "0",
        "help": "Timestamp of the first scenario file to replay. Defaults to the first one found.",
    },
    "single": {
        "prompt": "Is single scenario?",
        "default": False,
        "help": "Replays only the scenario at the start timestamp. If false, replays every scenario from it onwards."
    },
    "end_timestamp": {
        "prompt": "End timestamp",
        "default": "0",
        "help": "Last scenario timestamp to replay. Defaults to the most recent scenario file.",
        "depends": {
            "single": False
        }
    },
    "account": {
        "prompt": "Owner account name",
        "default": "DEPLOYER",
        "help": "Account that owns the simulated vault (key read from `<NAME>_PRIVATE_KEY`). Defaults to `DEPLOYER`"
    },
}


def param_prompt(ctx, param, value):
    param_config = CLICK_PROMPTS.get(param.name)
    if param_config is None:
        return value

    default_val = param_config.get("default")
    prompt = param_config.get("prompt")
    optional = default_val is not None

    if value != default_val:
        return value

    if prompt is None or (ctx.params.get("silent") and optional):
        return value

    depends = param_config.get("depends")
    if depends is not None:
        should_prompt = any(ctx.params.get(key) == expected for key, expected in depends.items())
        if not should_prompt:
            return value

    return click.prompt(
        f"{prompt} --{param.name.replace('_', '-')}",
        default=default_val,
        type=param_config.get("type"),
    )


@click.command()
@click.option("--silent", is_flag=True, default=False, is_eager=True, help="Run command without prompts.")
@click.option(
    "--blueprint", "-b",
    default=CLICK_PROMPTS["blueprint"]["default"],
    help=CLICK_PROMPTS["blueprint"]["help"],
    callback=param_prompt,
)
@click.option(
    "--start-timestamp", "-t",
    default=CLICK_PROMPTS["start_timestamp"]["default"],
    help=CLICK_PROMPTS["start_timestamp"]["help"],
    callback=param_prompt,
)
@click.option(
    "--single", "-s",
    is_flag=True,
    default=CLICK_PROMPTS["single"]["default"],
    help=CLICK_PROMPTS["single"]["help"],
    callback=param_prompt,
)
@click.option(
    "--end-timestamp", "-e",
    default=CLICK_PROMPTS["end_timestamp"]["default"],
    help=CLICK_PROMPTS["end_timestamp"]["help"],
    callback=param_prompt,
)
@click.option(
    "--account", "-a",
    default=CLICK_PROMPTS["account"]["default"],
    help=CLICK_PROMPTS["account"]["help"],
    callback=param_prompt,
)
@click.option("--scenarios-dir", default=SCENARIOS_DIR, help="Root folder of scenario files.")
@click.option("--history-dir", default=SCENARIO_HISTORY_DIR, help="Root folder manifests are written to.")
def cli(
    silent,
    blueprint,
    start_timestamp,
    single,
    end_timestamp,
    account,
    scenarios_dir,
    history_dir,
):
    """
    Replays vault scenarios against an in-memory environment.

    Scenario files live in `<scenarios-dir>/<blueprint>/` and are JSON
    documents prefixed with a numeric timestamp that orders them. Each one
    names the underlying asset, the accounts to fund and a list of steps
    (vault calls, `yield`, `loss`, `airdrop`, `sweep`, `time_travel`). A step
    carrying `reverts` must be rejected with that reason.

    After each scenario the final vault state is written as a JSON manifest
    to `<history-dir>/<blueprint>/`, and duplicated as
    `current-manifest.json`.
    """

    sender = get_account(account)
    deploy_args = DeployArgs(sender, blueprint)

    log.h1("Vault Simulation")
    log.info(f"Owner account `{sender.address}`.")
    log.info(f"Deployment arguments: {deploy_args}")
    log.info(f"Running scenarios starting with timestamp {start_timestamp}.")
    log.info("")
    log.h2("Running scenarios...")

    runner = ScenarioRunner(
        f"{scenarios_dir}/{blueprint}",
        f"{history_dir}/{blueprint}",
    )
    manifests = runner.run(deploy_args, start_timestamp, end_timestamp, not single)

    if not manifests:
        log.error(f"No scenarios found in `{scenarios_dir}/{blueprint}`.")
    log.info(f"Scenarios replayed: {len(manifests)}, steps: {runner.steps}")
    log.info("Done.")
    log.info("")


if __name__ == "__main__":
    cli()
