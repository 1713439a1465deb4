from .series import Series as Series
from .series_store import SeriesStore as SeriesStore
