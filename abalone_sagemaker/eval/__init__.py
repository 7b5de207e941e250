from .metrics import format_metrics, get_metrics
from .predictor import RingsPredictor, decode_predictions, merge_predictions, predict_dataset
