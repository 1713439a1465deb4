from .summary_table import SummaryTable as SummaryTable
from .summary_table_config import SummaryTableConfig as SummaryTableConfig
