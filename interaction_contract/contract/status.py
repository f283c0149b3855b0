"""
Traffic light status for an interaction list.

The engine sends a status next to its warnings. When the local evaluator
stands in for the engine it has to derive the same status itself.
"""

from typing import Iterable

from .models import InteractionWarning, Severity, TrafficLightStatus


def calculate_traffic_light(warnings: Iterable[InteractionWarning]) -> TrafficLightStatus:
    """
    Status from the most severe warning.

    Rules:
        - no warnings        -> green
        - any critical       -> red
        - any medium         -> yellow
        - only low severity  -> green
    """
    severities = {str(getattr(w.severity, "value", w.severity)) for w in warnings}

    if Severity.CRITICAL.value in severities:
        return TrafficLightStatus.RED
    if Severity.MEDIUM.value in severities:
        return TrafficLightStatus.YELLOW
    return TrafficLightStatus.GREEN
