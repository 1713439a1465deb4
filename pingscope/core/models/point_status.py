from enum import Enum


class PointStatus(Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    TIMEOUT = "TIMEOUT"
    INTERPOLATED = "INTERPOLATED"
