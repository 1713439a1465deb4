import re
from collections import defaultdict
from datetime import timedelta

DURATION_PATTERN = re.compile(
    r"(?P<val>\d+(\.\d+)?)(?P<unit>ms|[smhdw]?)",
    flags=re.I,
)


class TimeParser:
    def __init__(self) -> None:
        self._units = {
            "ms": "milliseconds",
            "s": "seconds",
            "m": "minutes",
            "h": "hours",
            "d": "days",
            "w": "weeks",
        }

    def parse(self, time_amount: str) -> float:
        amounts: dict[str, float] = defaultdict(float)

        for match in DURATION_PATTERN.finditer(time_amount):
            unit = self._units.get(match.group("unit").lower(), "seconds")
            amounts[unit] += float(match.group("val"))

        return timedelta(**amounts).total_seconds()
