"""Tests for run orchestration, export and the command line entry point."""

import json
import tempfile
import unittest
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import yaml

from configs import load_config, merge_configs
from tankersim.core.metrics_collector import MetricsCollector
from tankersim.core.runner import SimulationRunner
from tankersim.core.simulator import Simulator
from tankersim.main import main
from tankersim.terminal.entities import TankState
from tankersim.utils.io import load_snapshot_records, save_snapshots, snapshots_to_frame
from tankersim.utils.visualization import plot_results


def make_config():
    return {
        'simulation': {
            'simulation_time': 100,
            'number_of_runs': 2,
            'max_events': 25,
        },
        'parameters': {
            'arrival_mean': 1.0,
            'number_of_tanks': 3,
        },
        'initial_conditions': {
            'first_arrival': 0,
            'tanks': [
                {'status': 'free', 'current_load': 0},
                {'status': 'discharging', 'current_load': 70000, 'completion_time': 8},
                {'status': 'loading', 'current_load': 25000, 'completion_time': 3.5},
            ],
        },
        'random_numbers': {
            'arrival': [12, 87, 45, 3, 66],
            'load': [41, 8, 77, 95],
        },
        'metrics': {
            'percentiles': [50, 95],
        },
    }


class TestSimulatorFromConfig(unittest.TestCase):
    """Test building a simulator from configuration."""

    def test_from_config(self):
        simulator = Simulator.from_config(make_config())

        self.assertEqual(simulator.parameters.arrival_mean, 1.0)
        self.assertEqual(len(simulator.tanks), 3)
        self.assertEqual(simulator.get_tank(3).state, TankState.LOADING)
        self.assertEqual(len(simulator.ships), 1)

        row = simulator.step()
        self.assertEqual(row.arrival_draw, 0.12)
        self.assertEqual(row.load_draw, 0.41)
        self.assertEqual(row.load_tonnage, 20000)

    def test_per_run_draws(self):
        """Test a list of random number sets is cycled over runs."""
        config = make_config()
        config['random_numbers'] = [
            {'arrival': [10], 'load': [10]},
            {'arrival': [90], 'load': [90]},
        ]
        first = Simulator.from_config(config, run_index=0).step()
        second = Simulator.from_config(config, run_index=1).step()
        third = Simulator.from_config(config, run_index=2).step()

        self.assertEqual(first.arrival_draw, 0.1)
        self.assertEqual(second.arrival_draw, 0.9)
        self.assertEqual(third.arrival_draw, 0.1)


class TestSimulationRunner(unittest.TestCase):
    """Test cases for SimulationRunner."""

    def test_runs_are_independent(self):
        """Test each run gets a fresh simulator."""
        results = SimulationRunner(make_config()).run()

        self.assertEqual(len(results['runs']), 2)
        self.assertEqual(results['num_runs'], 2)
        for rows in results['runs']:
            self.assertEqual(len(rows), 25)
            self.assertEqual(rows[0].event_number, 1)
        self.assertEqual(
            [r.to_dict() for r in results['runs'][0]],
            [r.to_dict() for r in results['runs'][1]],
        )
        self.assertEqual(results['mean_event_count'], 25)
        self.assertIn('p95_total_discharged_tonnage', results)
        self.assertIn('Runs: 2', results['summary'])

    def test_overrides(self):
        """Test horizon, run and event overrides."""
        results = SimulationRunner(make_config()).run(horizon=5.0, number_of_runs=1, max_events=1000)

        self.assertEqual(len(results['runs']), 1)
        rows = results['runs'][0]
        self.assertTrue(all(r.clock_time <= 5.0 for r in rows))
        self.assertEqual(results['horizon'], 5.0)


class TestMetricsCollector(unittest.TestCase):
    """Test cases for MetricsCollector."""

    def test_empty(self):
        collector = MetricsCollector()
        self.assertEqual(collector.compute_metrics(), {'num_runs': 0})
        self.assertEqual(collector.get_summary(), "No runs recorded")

    def test_record_run(self):
        simulator = Simulator.from_config(make_config())
        simulator.run_until(max_events=25)

        collector = MetricsCollector(make_config())
        collector.record_run(simulator)
        metrics = collector.compute_metrics()

        self.assertEqual(metrics['num_runs'], 1)
        self.assertEqual(metrics['mean_event_count'], 25)
        self.assertEqual(metrics['mean_ships_arrived'], len(simulator.ships))
        self.assertEqual(
            metrics['max_total_discharged_tonnage'],
            simulator.statistics.total_discharged_tonnage,
        )
        self.assertIn('p50_max_queue_length', metrics)


class TestExport(unittest.TestCase):
    """Test snapshot export helpers."""

    def setUp(self):
        simulator = Simulator.from_config(make_config())
        self.rows = simulator.run_until(max_events=10)

    def test_frame(self):
        frame = snapshots_to_frame(self.rows)

        self.assertEqual(len(frame), 10)
        self.assertEqual(frame.index.name, 'event_number')
        self.assertEqual(frame.loc[1, 'event'], 'Ship arrival')
        self.assertEqual(frame.loc[1, 'tank_1_status'], 'Loading')
        self.assertEqual(frame.loc[1, 'tank_1_loading_ship'], 'B2')
        self.assertEqual(frame.loc[1, 'tank_2_status'], 'Discharging')
        self.assertEqual(frame.loc[1, 'tank_2_next_completion_time'], 8)

    def test_empty_frame(self):
        self.assertTrue(snapshots_to_frame([]).empty)

    def test_save(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            csv_path = save_snapshots(self.rows, str(Path(tmpdir) / "out" / "run.csv"))
            json_path = save_snapshots(self.rows, str(Path(tmpdir) / "run.json"))

            self.assertTrue(csv_path.exists())
            records = load_snapshot_records(str(json_path))
            self.assertEqual(len(records), 10)
            self.assertEqual(records[0]['event_type'], 'ship_arrival')

            with self.assertRaises(ValueError):
                save_snapshots(self.rows, str(Path(tmpdir) / "run.txt"))

    def test_plots(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = plot_results(self.rows, Path(tmpdir))
            self.assertEqual(len(paths), 2)
            for path in paths:
                self.assertTrue(path.exists())


class TestConfigAndCli(unittest.TestCase):
    """Test YAML configuration and the command line entry point."""

    def test_load_and_merge(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            with open(path, 'w') as f:
                yaml.dump(make_config(), f)

            config = load_config(str(path))
            self.assertEqual(config['parameters']['number_of_tanks'], 3)

        merged = merge_configs(config, {'parameters': {'arrival_mean': 2.0}})
        self.assertEqual(merged['parameters']['arrival_mean'], 2.0)
        self.assertEqual(merged['parameters']['number_of_tanks'], 3)

    def test_main(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.yaml"
            with open(config_path, 'w') as f:
                yaml.dump(make_config(), f)
            output_dir = Path(tmpdir) / "results"

            code = main([
                "--config", str(config_path),
                "--output-dir", str(output_dir),
                "--runs", "1",
                "--max-events", "12",
            ])

            self.assertEqual(code, 0)
            self.assertTrue((output_dir / "run_1.csv").exists())
            with open(output_dir / "results.yaml") as f:
                summary = yaml.safe_load(f)
            self.assertEqual(summary['num_runs'], 1)
            self.assertEqual(summary['mean_event_count'], 12)

    def test_main_reports_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = make_config()
            config['initial_conditions']['tanks'][2].pop('completion_time')
            config_path = Path(tmpdir) / "config.yaml"
            with open(config_path, 'w') as f:
                json.dump(config, f)

            code = main(["--config", str(config_path), "--output-dir", tmpdir])
            self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
