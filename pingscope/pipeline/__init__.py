from .pipeline_config import PipelineConfig as PipelineConfig
from .scheduler import PipelineScheduler as PipelineScheduler
