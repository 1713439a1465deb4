import math


def format_latency(latency: float) -> str:
    if math.isnan(latency):
        return "N/A"

    if latency < 1.0:
        return f"{latency * 1000:.0f}µs"

    elif latency < 1000.0:
        return f"{latency:.1f}ms"

    return f"{latency / 1000:.2f}s"
