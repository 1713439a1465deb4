from __future__ import annotations

from typing import TYPE_CHECKING

from .latency_format import format_latency
from .running_stats import loss_rate, standard_deviation

if TYPE_CHECKING:
    from pingscope.core.series import Series


SUMMARY_KEYS = (
    "Loss",
    "Sent",
    "Received",
    "Mean",
    "Min",
    "Max",
    "StdDev",
)


def build_summary(series: Series) -> dict[str, str]:
    summary: dict[str, str] = {
        "Loss": f"{loss_rate(series.packets_sent, series.packets_received):.1f}%",
        "Sent": str(series.packets_sent),
        "Received": str(series.packets_received),
        "Mean": "N/A",
        "Min": "N/A",
        "Max": "N/A",
        "StdDev": "N/A",
    }

    if series.packets_received > 0:
        summary["Mean"] = format_latency(series.stats.mean)
        summary["Min"] = format_latency(series.min_latency)
        summary["Max"] = format_latency(series.max_latency)

        stddev = standard_deviation(series.stats)
        if stddev is not None:
            summary["StdDev"] = format_latency(stddev)

    return summary
