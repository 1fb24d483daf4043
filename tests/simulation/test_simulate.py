import json
import os

import pytest
from click.testing import CliRunner

from scripts.simulate import cli
from scripts.utils import json_file
from scripts.utils.deploy_args import DeployArgs
from scripts.utils.scenario import Scenario
from scripts.utils.scenario_helpers import TEST_PRIVATE_KEY, get_account, load_scenario_files, parse_amount
from scripts.utils.scenario_runner import ScenarioError, ScenarioRunner
from sharevault import MAX_UINT256
from sharevault.errors import VaultError


SCENARIOS_ROOT = os.path.join(os.path.dirname(__file__), "..", "..", "scenarios")


@pytest.fixture
def deploy_args(monkeypatch):
    monkeypatch.delenv("DEPLOYER_PRIVATE_KEY", raising=False)
    return DeployArgs(get_account("DEPLOYER"), "local")


@pytest.fixture
def scenario_dir(tmp_path):
    directory = tmp_path / "scenarios"
    directory.mkdir()
    return directory


def write_scenario(directory, filename, config):
    return json_file.save(str(directory / filename), config)


###########
# Helpers #
###########


def test_parse_amount():
    assert parse_amount(100, 6) == 100
    assert parse_amount("units:3", 6) == 3_000_000
    assert parse_amount("max", 18) == MAX_UINT256

    with pytest.raises(ValueError):
        parse_amount("ten", 18)


def test_load_scenario_files_orders_by_prefix(scenario_dir):
    write_scenario(scenario_dir, "0010-later.json", {})
    write_scenario(scenario_dir, "0002-first.json", {})
    write_scenario(scenario_dir, "notes.json", {})
    (scenario_dir / "0003-skipped.txt").write_text("")

    files = load_scenario_files(str(scenario_dir))

    assert list(files) == [2, 10]
    assert files[2].endswith("0002-first.json")
    assert load_scenario_files(str(scenario_dir / "missing")) == {}


def test_get_account_falls_back_to_test_key(monkeypatch):
    monkeypatch.delenv("NOBODY_PRIVATE_KEY", raising=False)
    account = get_account("NOBODY")
    assert account.key.hex().removeprefix("0x") == TEST_PRIVATE_KEY.removeprefix("0x")


def test_unknown_blueprint(deploy_args):
    with pytest.raises(ValueError):
        DeployArgs(deploy_args.sender, "mainnet")


############
# Scenario #
############


def test_scenario_replays_bootstrap_and_yield(deploy_args):
    config = json_file.load(os.path.join(SCENARIOS_ROOT, "local", "0001-bootstrap-and-yield.json"))

    manifest = Scenario(deploy_args, config, 1).run()

    assert manifest["steps"] == 6
    assert manifest["vault"]["symbol"] == "svALPHA"
    assert manifest["vault"]["owner"] == deploy_args.sender.address
    assert manifest["vault"]["totalSupply"] == "140"
    assert manifest["vault"]["totalAssets"] == "155"
    assert manifest["holders"] == {"bob": "50", "alice": "90"}

    deposits = [e for e in manifest["events"] if e["event"] == "Deposit"]
    assert [e["shares"] for e in deposits] == ["100", "90"]


def test_scenario_unexpected_revert_propagates(deploy_args):
    config = {
        "asset": "ALPHA",
        "accounts": ["bob"],
        "steps": [{"action": "deposit", "sender": "bob", "args": [100, "bob"]}],
    }
    with pytest.raises(VaultError) as e:
        Scenario(deploy_args, config, 1).run()
    assert e.value.reason == "insufficient allowance"


def test_scenario_missing_revert_fails(deploy_args):
    config = {
        "asset": "ALPHA",
        "steps": [{"action": "pause", "reverts": "no perms"}],
    }
    with pytest.raises(AssertionError, match="call did not revert"):
        Scenario(deploy_args, config, 1).run()


def test_scenario_unknown_action(deploy_args):
    config = {"asset": "ALPHA", "steps": [{"action": "selfdestruct"}]}
    with pytest.raises(ValueError):
        Scenario(deploy_args, config, 1).run()


def test_scenario_prints_events_once(deploy_args, capsys):
    config = {
        "asset": "ALPHA",
        "accounts": ["bob"],
        "fund": {"bob": 100},
        "steps": [
            {"action": "deposit", "sender": "bob", "args": [100, "bob"]},
            {"action": "time_travel", "args": [60]},
        ],
    }
    capsys.readouterr()

    Scenario(deploy_args, config, 1).run()

    assert capsys.readouterr().out.count("Deposit") == 1


def test_scenario_unknown_token_key(deploy_args):
    config = {
        "asset": "ALPHA",
        "strays": ["BRAVO"],
        "accounts": ["treasury"],
        "steps": [{"action": "sweep", "args": ["BRAVOO", "treasury"], "reverts": "cannot sweep vault asset"}],
    }
    with pytest.raises(ValueError, match="unknown scenario token"):
        Scenario(deploy_args, config, 1).run()


##########
# Runner #
##########


def test_runner_writes_manifests(deploy_args, scenario_dir, tmp_path):
    write_scenario(scenario_dir, "0001-deposit.json", {
        "asset": "ALPHA",
        "accounts": ["bob"],
        "fund": {"bob": "units:1"},
        "steps": [{"action": "deposit", "sender": "bob", "args": ["units:1", "bob"]}],
    })
    write_scenario(scenario_dir, "0002-pause.json", {
        "asset": "ALPHA",
        "steps": [{"action": "pause"}, {"action": "time_travel", "args": [60]}],
    })
    history_dir = tmp_path / "history"

    runner = ScenarioRunner(str(scenario_dir), str(history_dir))
    manifests = runner.run(deploy_args)

    assert len(manifests) == 2
    assert runner.steps == 3
    assert runner.latest_manifest_timestamp() == 2
    assert json.loads((history_dir / "0001-manifest.json").read_text())["vault"]["totalSupply"] == str(10 ** 18)
    assert json.loads((history_dir / "current-manifest.json").read_text())["vault"]["paused"] is True
    assert sorted(p.name for p in history_dir.iterdir()) == ["0001-manifest.json", "0002-manifest.json", "current-manifest.json"]


def test_runner_single_and_range(deploy_args, scenario_dir, tmp_path):
    for prefix in ("0001", "0002", "0003"):
        write_scenario(scenario_dir, f"{prefix}-noop.json", {"asset": "ALPHA"})

    runner = ScenarioRunner(str(scenario_dir), str(tmp_path / "history"))

    assert [m["timestamp"] for m in runner.run(deploy_args, "2", None, False)] == [2]
    assert [m["timestamp"] for m in runner.run(deploy_args, "2", "2")] == [2]
    assert [m["timestamp"] for m in runner.run(deploy_args, None, "0")] == [1, 2, 3]


def test_runner_failure_carries_timestamp(deploy_args, scenario_dir, tmp_path):
    write_scenario(scenario_dir, "0007-broken.json", {
        "asset": "ALPHA",
        "steps": [{"action": "unpause"}],
    })
    runner = ScenarioRunner(str(scenario_dir), str(tmp_path / "history"))

    with pytest.raises(ScenarioError) as e:
        runner.run(deploy_args)

    assert e.value.failure_timestamp == 7
    assert "Timestamp of failed scenario file: 7" in str(e.value)
    assert runner.latest_manifest_timestamp() is None


#######
# Cli #
#######


@pytest.mark.parametrize("blueprint", ["local", "base"])
def test_cli_replays_bundled_scenarios(blueprint, tmp_path, monkeypatch):
    monkeypatch.delenv("DEPLOYER_PRIVATE_KEY", raising=False)
    history_dir = tmp_path / "history"

    result = CliRunner().invoke(cli, [
        "--silent",
        "--blueprint", blueprint,
        "--scenarios-dir", SCENARIOS_ROOT,
        "--history-dir", str(history_dir),
    ])

    assert result.exit_code == 0, result.output
    assert "Done." in result.output
    assert (history_dir / blueprint / "current-manifest.json").exists()
    expected = len(load_scenario_files(os.path.join(SCENARIOS_ROOT, blueprint)))
    assert len(list((history_dir / blueprint).glob("*-manifest.json"))) == expected + 1


def test_cli_single_scenario(tmp_path, monkeypatch):
    monkeypatch.delenv("DEPLOYER_PRIVATE_KEY", raising=False)
    history_dir = tmp_path / "history"

    result = CliRunner().invoke(cli, [
        "--silent",
        "-b", "local",
        "-t", "2",
        "-s",
        "--scenarios-dir", SCENARIOS_ROOT,
        "--history-dir", str(history_dir),
    ])

    assert result.exit_code == 0, result.output
    manifest = json.loads((history_dir / "local" / "current-manifest.json").read_text())
    assert manifest["timestamp"] == 2
    assert manifest["vault"]["paused"] is False
