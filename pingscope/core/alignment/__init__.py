from .time_aligner import TimeAligner as TimeAligner
