from .irr import IRRComparator, calc_irr, survival_probabilities
from .params import EvaluationParameters
from .partition import PartitionSelector
from .scoring import PredictionRecord, SurvivalScorer
from .stage import EvaluationOptionsStep, ValidationPlotStep, evaluation_stage
