from .export_stage import export_stage
from .evaluation import evaluation_stage
