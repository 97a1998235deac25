"""Main entry point for the TankerSim simulator."""

import argparse
import sys
from pathlib import Path
import yaml

from tankersim.core.runner import SimulationRunner
from tankersim.utils.io import save_snapshots
from tankersim.utils.logger import setup_logger
from configs import load_config, merge_configs


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="TankerSim: Tanker Fuel Terminal Simulator"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/default.yaml",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--override",
        type=str,
        default=None,
        help="Optional configuration file merged over --config",
    )
    parser.add_argument(
        "--horizon",
        type=float,
        default=None,
        help="Simulated hours to run (defaults to simulation.simulation_time)",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=None,
        help="Number of independent runs",
    )
    parser.add_argument(
        "--max-events",
        type=int,
        default=None,
        help="Maximum number of events per run",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="results",
        help="Directory to save results",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Generate visualization plots",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else "INFO"
    logger = setup_logger("tankersim", level=log_level)

    logger.info("=== TankerSim: Tanker Fuel Terminal Simulator ===")
    logger.info(f"Loading configuration from {args.config}")

    try:
        config = load_config(args.config)
        if args.override:
            config = merge_configs(config, load_config(args.override))

        runner = SimulationRunner(config)
        results = runner.run(
            horizon=args.horizon,
            number_of_runs=args.runs,
            max_events=args.max_events,
            progress=True,
        )

        logger.info("\n" + results['summary'])

        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        for index, rows in enumerate(results['runs'], start=1):
            path = save_snapshots(rows, str(output_dir / f"run_{index}.csv"))
            logger.info(f"Run {index}: {len(rows)} events saved to {path}")

        summary = {k: v for k, v in results.items() if k not in ('runs', 'summary')}
        results_file = output_dir / "results.yaml"
        with open(results_file, 'w') as f:
            yaml.dump(summary, f, default_flow_style=False)
        logger.info(f"Results saved to {results_file}")

        if args.visualize:
            from tankersim.utils.visualization import plot_results

            logger.info("Generating visualization plots...")
            for index, rows in enumerate(results['runs'], start=1):
                plot_results(rows, output_dir / f"run_{index}")
            logger.info(f"Plots saved to {output_dir}")

        logger.info("Simulation completed successfully!")
        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
