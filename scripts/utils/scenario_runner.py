import os
import re

from scripts.utils import log
from scripts.utils import json_file
from scripts.utils.deploy_args import DeployArgs
from scripts.utils.scenario import Scenario
from scripts.utils.scenario_helpers import load_scenario_files


class ScenarioError(Exception):
    """
    Error raised while replaying a scenario. Carries the `failure_timestamp`
    of the scenario file so a later run can resume from it.
    """

    def __init__(
        self, failure_timestamp, message="An error occurred while running scenario"
    ):
        self.failure_timestamp = failure_timestamp
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"{self.message}. Timestamp of failed scenario file: {self.failure_timestamp}"


class ScenarioRunner:
    """
    Replays scenario files in timestamp order and stores one JSON manifest per
    scenario in the history directory.
    """

    def __init__(self, scenarios_dir, history_dir):
        self.scenarios_dir = scenarios_dir
        self.history_dir = history_dir
        self.steps = 0

    def run(self, deploy_args: DeployArgs, start_timestamp=None, end_timestamp=None, continue_running=True):
        """
        Run scenarios starting ON OR AFTER `start_timestamp` and up to
        `end_timestamp` (both optional). Each scenario starts from a fresh
        environment. The manifest of the last scenario is duplicated as
        `current-manifest.json`.
        """
        manifests = []
        for timestamp, filename in self._scenarios(start_timestamp, end_timestamp):
            log.h1(f"Running scenario {filename}...")
            try:
                scenario = Scenario(deploy_args, json_file.load(filename), timestamp)
                manifest = scenario.run()
            except Exception as exception:
                raise ScenarioError(timestamp) from exception

            self.steps += manifest["steps"]
            log.vault_state(scenario.vault)
            json_file.save(self._manifest_filename(self._prefix(filename)), manifest)
            json_file.save(self._manifest_filename("current"), manifest)
            manifests.append(manifest)

            if not continue_running:
                break
        return manifests

    def _scenarios(self, start_timestamp=None, end_timestamp=None):
        start = int(start_timestamp) if start_timestamp else None
        end = int(end_timestamp) if end_timestamp and end_timestamp != '0' else None

        for timestamp, filename in load_scenario_files(self.scenarios_dir).items():
            if end is not None and timestamp > end:
                break
            if start is None or timestamp >= start:
                yield timestamp, filename

    def _prefix(self, filename):
        # manifests keep the scenario file's own prefix, zero padding included
        return os.path.basename(filename).split("-", 1)[0]

    def _manifest_filename(self, timestamp):
        return os.path.join(self.history_dir, f"{timestamp}-manifest.json")

    def latest_manifest_timestamp(self):
        # timestamp of the most recently replayed scenario (None if nothing ran yet)

        latest_timestamp = None
        if not os.path.exists(self.history_dir):
            return latest_timestamp

        for file in os.listdir(self.history_dir):
            match = re.fullmatch(r"(\d+)\-manifest\.json$", file)
            if match:
                timestamp = int(match.group(1))
                if latest_timestamp is None or timestamp > latest_timestamp:
                    latest_timestamp = timestamp

        return latest_timestamp
