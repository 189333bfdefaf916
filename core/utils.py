"""
Utility functions for Laborboard
"""
from datetime import datetime


def round_metrics(value, places=2):
    """Round every float in a nested dict/list structure for display."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return round(value, places)
    if isinstance(value, dict):
        return {key: round_metrics(item, places) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [round_metrics(item, places) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value