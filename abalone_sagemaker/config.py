# abalone_sagemaker/config.py

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

ABALONE_URL = 'https://archive.ics.uci.edu/ml/machine-learning-databases/abalone/abalone.data'

# sex, measurements, label; the raw file has no header
RAW_COLUMNS = [
    'sex', 'length', 'diameter', 'height', 'whole_weight',
    'shucked_weight', 'viscera_weight', 'shell_weight', 'rings'
]
MEASUREMENT_COLUMNS = RAW_COLUMNS[1:-1]
LABEL = 'rings'
SEX_INDICATORS = {'F': 'female', 'M': 'male', 'I': 'infant'}

# CSV inference requests are capped at this many rows
MAX_ROWS_PER_REQUEST = 500


class Config:
    def __init__(
        self,
        source_url: str = ABALONE_URL,
        # (train, test, validation); test/validation split the remainder
        fractions: Tuple[float, float, float] = (0.70, 0.15, 0.15),
        seed: Optional[int] = None,
        # remote storage
        bucket: Optional[str] = None,      # None: the session's default bucket
        key_prefix: str = 'data',
        output_prefix: str = 'output',
        # training / hosting
        role: Optional[str] = None,        # None: the notebook's execution role
        region: Optional[str] = None,
        xgboost_version: str = '1.7-1',
        train_instance_type: str = 'ml.m5.large',
        train_volume_size: int = 30,
        train_max_run: int = 3600,
        hosting_instance_type: str = 'ml.t2.medium',
        instance_count: int = 1,
        hyperparameters: Optional[Dict[str, Any]] = None,
        job_prefix: str = 'sagemaker-train-xgboost',
        max_rows_per_request: int = MAX_ROWS_PER_REQUEST,
        delete_endpoint: bool = True,
        save_plots: bool = False,
        project_root: Optional[Path] = None
    ):
        self.project_root = project_root or Path(__file__).resolve().parents[1]
        self.data_dir = self.project_root / "data"
        self.raw_path = self.data_dir / "raw"
        self.processed_data_path = self.data_dir / "processed"
        self.source_url = source_url
        self.fractions = tuple(fractions)
        self.seed = seed
        self.bucket = bucket
        self.key_prefix = key_prefix
        self.output_prefix = output_prefix
        self.role = role
        self.region = region
        self.xgboost_version = xgboost_version
        self.train_instance_type = train_instance_type
        self.train_volume_size = train_volume_size
        self.train_max_run = train_max_run
        self.hosting_instance_type = hosting_instance_type
        self.instance_count = instance_count
        self.hyperparameters = hyperparameters if hyperparameters is not None else {'num_round': 100}
        self.job_prefix = job_prefix
        self.max_rows_per_request = max_rows_per_request
        self.delete_endpoint = delete_endpoint
        self.save_plots = save_plots
        self.plots_path = self.data_dir / "plots"

    def to_dict(self) -> Dict:
        return {
            'source_url': self.source_url,
            'fractions': list(self.fractions),
            'seed': self.seed,
            'bucket': self.bucket,
            'key_prefix': self.key_prefix,
            'output_prefix': self.output_prefix,
            'role': self.role,
            'region': self.region,
            'xgboost_version': self.xgboost_version,
            'train_instance_type': self.train_instance_type,
            'train_volume_size': self.train_volume_size,
            'train_max_run': self.train_max_run,
            'hosting_instance_type': self.hosting_instance_type,
            'instance_count': self.instance_count,
            'hyperparameters': dict(self.hyperparameters),
            'job_prefix': self.job_prefix,
            'max_rows_per_request': self.max_rows_per_request,
            'delete_endpoint': self.delete_endpoint,
            'save_plots': self.save_plots,
            'project_root': str(self.project_root),
            'data_dir': str(self.data_dir),
            'processed_data_path': str(self.processed_data_path)
        }
