"""Step-by-step terminal simulation example."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tankersim.core.simulator import Simulator
from tankersim.utils.io import snapshots_to_frame
from tankersim.utils.labels import ship_reference, tank_state_label
from tankersim.utils.logger import setup_logger
from configs import DEFAULT_CONFIG_PATH, load_config


def main():
    """Advance a run one event at a time and print the state vector."""
    logger = setup_logger("StepByStep")

    logger.info("=== Tanker Terminal: Step by Step ===")

    config = load_config(str(DEFAULT_CONFIG_PATH))
    simulator = Simulator.from_config(config)

    rows = []
    for _ in range(15):
        row = simulator.step()
        rows.append(row)

        tanks = ", ".join(
            f"T{t.tank_id}={tank_state_label(t.status)}"
            + (f"({ship_reference(t.loading_ship_id)})" if t.loading_ship_id else "")
            for t in row.per_tank_status
        )
        logger.info(f"#{row.event_number:>3} t={row.clock_time:8.4f} {row.event_label:<20} {tanks}")

    logger.info(f"\nDischarged tonnage: {simulator.statistics.total_discharged_tonnage:.0f} t")
    logger.info(f"Max queue length: {simulator.statistics.max_queue_length}")

    frame = snapshots_to_frame(rows)
    print(frame[['clock_time', 'event', 'total_discharged_tonnage', 'max_queue_length']].to_string())


if __name__ == "__main__":
    main()
