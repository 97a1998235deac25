"""Metrics collection and aggregation across runs."""

import numpy as np
from typing import Dict, List, Optional
from collections import defaultdict

from ..terminal.entities import ShipState
from ..utils.logger import setup_logger


class MetricsCollector:
    """Collect and aggregate end-of-run statistics.

    Each run contributes one sample per metric; aggregates are computed
    over runs.
    """

    METRICS = (
        'total_discharged_tonnage',
        'max_queue_length',
        'event_count',
        'ships_arrived',
        'ships_discharged',
        'final_clock',
    )

    def __init__(self, config: Optional[Dict] = None):
        """Initialize metrics collector.

        Args:
            config: Configuration dictionary
        """
        config = config or {}
        self.logger = setup_logger(self.__class__.__name__)
        self.samples = defaultdict(list)
        self.percentiles = (config.get('metrics') or {}).get('percentiles', [50, 90, 95, 99])

    @property
    def num_runs(self) -> int:
        return len(self.samples['event_count'])

    def record_run(self, simulator) -> None:
        """Record the final statistics of a finished run.

        Args:
            simulator: Simulator whose run has ended
        """
        stats = simulator.statistics
        ships = simulator.ships
        values = {
            'total_discharged_tonnage': stats.total_discharged_tonnage,
            'max_queue_length': stats.max_queue_length,
            'event_count': stats.event_count,
            'ships_arrived': len(ships),
            'ships_discharged': sum(1 for s in ships if s.state == ShipState.DISCHARGED),
            'final_clock': simulator.clock,
        }
        for key, value in values.items():
            self.samples[key].append(value)

    def compute_metrics(self) -> Dict:
        """Compute aggregate metrics over recorded runs.

        Returns:
            Dictionary of computed metrics
        """
        results = {'num_runs': self.num_runs}
        for name in self.METRICS:
            if self.samples[name]:
                results.update(self._compute_distribution_metrics(name, self.samples[name]))
        return results

    def _compute_distribution_metrics(self, name: str, values: List[float]) -> Dict:
        """Compute distribution statistics for a metric.

        Args:
            name: Metric name
            values: List of values

        Returns:
            Dictionary with mean, spread and percentiles
        """
        if not values:
            return {}

        results = {
            f'mean_{name}': float(np.mean(values)),
            f'std_{name}': float(np.std(values)),
            f'min_{name}': float(np.min(values)),
            f'max_{name}': float(np.max(values)),
        }

        for p in self.percentiles:
            results[f'p{p}_{name}'] = float(np.percentile(values, p))

        return results

    def get_summary(self) -> str:
        """Get human-readable summary of metrics.

        Returns:
            Formatted string with key metrics
        """
        if not self.num_runs:
            return "No runs recorded"

        return "\n".join([
            "=== Terminal Summary ===",
            f"Runs: {self.num_runs}",
            f"Mean Discharged Tonnage: {np.mean(self.samples['total_discharged_tonnage']):.0f} t",
            f"Max Queue Length: {np.max(self.samples['max_queue_length']):.0f}",
            f"Mean Ships Arrived: {np.mean(self.samples['ships_arrived']):.1f}",
            f"Mean Events: {np.mean(self.samples['event_count']):.1f}",
        ])
