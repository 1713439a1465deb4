from .latency_format import format_latency as format_latency
from .running_stats import (
    RunningStats as RunningStats,
    loss_rate as loss_rate,
    standard_deviation as standard_deviation,
    update_running_stats as update_running_stats,
    variance as variance,
)
from .summary import SUMMARY_KEYS as SUMMARY_KEYS, build_summary as build_summary
