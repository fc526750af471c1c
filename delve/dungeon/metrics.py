from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'leaves': 0,
        'rooms': 0,
        'rooms_dug': 0,
        'room_intrusions': 0,
        'tunnels': 0,
        'tunnel_intrusions': 0,
        'halls_skipped': 0,
        'halls_repaired': 0,
        'doors_created': 0,
        'things_placed': 0,
        'unreachable_rooms': 0,
        'runtime_ms': 0.0,
    }


__all__ = ["init_metrics"]
