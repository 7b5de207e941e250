from .fetch_data import fetch_abalone
from .clean_data import cleaning_pipeline
from .engineer_features import make_features
from .get_data import prep_data, get_X_y, load_data_bundle
from .write_data import encode_csv, iter_batches, dump_csv, dump_csvs
from .types import DataBundle
from .pipeline import run_data_pipeline
