from typing import Dict


def init_metrics() -> Dict[str, int]:
    return {
        'nodes': 0,
        'leaves': 0,
        'rooms': 0,
        'corridor_segments': 0,
        'tree_depth': 0,
        'tiles_floor': 0,
        'tiles_wall': 0,
        'tiles_inflated': 0,
        'tiles_backfilled': 0,
        'runtime_ms': 0,
    }
