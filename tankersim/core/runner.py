"""Run orchestration: one independent simulator per run."""

import time
from typing import Dict, List, Optional

from tqdm import tqdm

from .metrics_collector import MetricsCollector
from .simulator import Simulator
from .snapshot import SnapshotRow
from ..models.parameters import SimulationParameters
from ..utils.logger import setup_logger


class SimulationRunner:
    """Run ``number_of_runs`` simulations up to the configured horizon.

    Runs never share state; each gets a fresh ``Simulator`` built from the
    configuration.
    """

    def __init__(self, config: Dict):
        """Initialize runner.

        Args:
            config: Simulation configuration dictionary
        """
        self.config = config
        self.parameters = SimulationParameters.from_config(config)
        self.logger = setup_logger(self.__class__.__name__)

    def run(
        self,
        horizon: Optional[float] = None,
        number_of_runs: Optional[int] = None,
        max_events: Optional[int] = None,
        progress: bool = False,
    ) -> Dict:
        """Run the simulations.

        Args:
            horizon: Last simulated time to process
            number_of_runs: Overrides the configured number of runs
            max_events: Overrides the configured row cap per run
            progress: Show a progress bar over runs

        Returns:
            Dictionary with the snapshot rows of every run under ``runs``
            and the aggregate metrics
        """
        start_time = time.time()
        number_of_runs = number_of_runs or self.parameters.number_of_runs
        horizon = self.parameters.simulation_time if horizon is None else horizon

        collector = MetricsCollector(self.config)
        runs: List[List[SnapshotRow]] = []

        self.logger.info(f"Starting {number_of_runs} run(s) up to t={horizon}")
        for run_index in tqdm(range(number_of_runs), desc="Runs", disable=not progress):
            simulator = Simulator.from_config(self.config, run_index=run_index)
            rows = simulator.run_until(horizon, max_events=max_events)
            collector.record_run(simulator)
            runs.append(rows)

        elapsed_time = time.time() - start_time
        self.logger.info(f"Completed {number_of_runs} run(s) in {elapsed_time:.2f}s")

        return {
            'runs': runs,
            'horizon': horizon,
            **collector.compute_metrics(),
            'summary': collector.get_summary(),
        }
