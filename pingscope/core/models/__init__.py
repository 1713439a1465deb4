from .data_point import DataPoint as DataPoint
from .point_status import PointStatus as PointStatus
from .sample import Sample as Sample
