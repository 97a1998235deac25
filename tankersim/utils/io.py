# tankersim/utils/io.py
"""
IO helpers: tabular export of snapshot rows and JSON persistence.
"""
import json
from typing import Any, Dict, List, Sequence
from pathlib import Path

import pandas as pd

from .labels import ship_reference, tank_state_label


def snapshot_to_record(row) -> Dict[str, Any]:
    """Flatten a snapshot row into a single-level record.

    Per-tank entries become ``tank_<id>_<field>`` columns.
    """
    record = {
        'event_number': row.event_number,
        'clock_time': row.clock_time,
        'event': row.event_label,
        'arrival_draw': row.arrival_draw,
        'inter_arrival_time': row.inter_arrival_time,
        'next_arrival_time': row.next_arrival_time,
        'load_draw': row.load_draw,
        'load_tonnage': row.load_tonnage,
        'pump_duration': row.pump_duration,
        'pump_duration_with_startup': row.pump_duration_with_startup,
        'pump_completion_time': row.pump_completion_time,
        'tank_load_at_pump_start': row.tank_load_at_pump_start,
        'pump_start_completion_time': row.pump_start_completion_time,
        'discharge_load_at_start': row.discharge_load_at_start,
        'discharge_completion_time': row.discharge_completion_time,
    }
    for info in row.per_tank_completion_info:
        record[f'tank_{info.tank_id}_remaining_load'] = info.remaining_load
        record[f'tank_{info.tank_id}_next_completion_time'] = info.next_completion_time
    record['total_discharged_tonnage'] = row.total_discharged_tonnage
    record['max_queue_length'] = row.max_queue_length
    for info in row.per_tank_status:
        record[f'tank_{info.tank_id}_status'] = tank_state_label(info.status)
        record[f'tank_{info.tank_id}_loading_ship'] = ship_reference(info.loading_ship_id)
    return record


def snapshots_to_frame(rows: Sequence) -> pd.DataFrame:
    """Build a DataFrame with one row per processed event."""
    frame = pd.DataFrame([snapshot_to_record(row) for row in rows])
    if not frame.empty:
        frame = frame.set_index('event_number')
    return frame


def save_snapshots(rows: Sequence, file_path: str) -> Path:
    """Save snapshot rows as CSV or JSON, chosen by file extension."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix == '.json':
        save_json([json.loads(row.to_json()) for row in rows], str(path))
    elif path.suffix == '.csv':
        snapshots_to_frame(rows).to_csv(path)
    else:
        raise ValueError(f"Unsupported snapshot format: {path.suffix}")
    return path


def save_json(obj: Any, file_path: str, indent: int = 2):
    """Save object as JSON."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(obj, f, indent=indent)


def load_json(file_path: str) -> Any:
    """Load JSON file."""
    with open(file_path, 'r') as f:
        return json.load(f)


def load_snapshot_records(file_path: str) -> List[Dict[str, Any]]:
    """Load snapshot rows previously saved as JSON."""
    data = load_json(file_path)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of snapshot rows in {file_path}")
    return data
