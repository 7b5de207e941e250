# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from abalone_sagemaker.config import RAW_COLUMNS, Config
from abalone_sagemaker.models.interfaces import (
    Endpoint,
    InstanceSpec,
    ObjectStore,
    TrainingJob,
    TrainingPlatform,
)

# first rows of the UCI file
ABALONE_LINES = [
    "M,0.455,0.365,0.095,0.514,0.2245,0.101,0.15,15",
    "M,0.35,0.265,0.09,0.2255,0.0995,0.0485,0.07,7",
    "F,0.53,0.42,0.135,0.677,0.2565,0.1415,0.21,9",
    "M,0.44,0.365,0.125,0.516,0.2155,0.114,0.155,10",
    "I,0.33,0.255,0.08,0.205,0.0895,0.0395,0.055,7",
    "I,0.425,0.3,0.095,0.3515,0.141,0.0775,0.12,8",
    "F,0.53,0.415,0.15,0.7775,0.237,0.1415,0.33,20",
    "F,0.545,0.425,0.125,0.768,0.294,0.1495,0.26,16",
    "M,0.475,0.37,0.125,0.5095,0.2165,0.1125,0.165,9",
    "F,0.55,0.44,0.15,0.8945,0.3145,0.151,0.32,19",
]


def make_raw_frame(n: int, seed: int = 0, zero_height: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    df = pd.DataFrame({
        "sex": rng.choice(["F", "M", "I"], size=n),
        "length": rng.uniform(0.1, 0.8, n).round(3),
        "diameter": rng.uniform(0.1, 0.6, n).round(3),
        "height": rng.uniform(0.01, 0.25, n).round(3),
        "whole_weight": rng.uniform(0.01, 2.5, n).round(4),
        "shucked_weight": rng.uniform(0.01, 1.2, n).round(4),
        "viscera_weight": rng.uniform(0.01, 0.6, n).round(4),
        "shell_weight": rng.uniform(0.01, 0.9, n).round(4),
        "rings": rng.integers(1, 29, n),
    })
    if zero_height:
        df.loc[df.index[:zero_height], "height"] = 0.0
    return df[RAW_COLUMNS]


@pytest.fixture
def raw_df() -> pd.DataFrame:
    rows = [line.split(",") for line in ABALONE_LINES]
    df = pd.DataFrame(rows, columns=RAW_COLUMNS)
    for c in RAW_COLUMNS[1:]:
        df[c] = pd.to_numeric(df[c])
    return df


@pytest.fixture
def raw_file(tmp_path: Path) -> Path:
    path = tmp_path / "abalone.data"
    path.write_text("\n".join(ABALONE_LINES) + "\n")
    return path


@pytest.fixture
def large_raw_file(tmp_path: Path) -> Path:
    """80 rows, two of them with a zero height."""
    path = tmp_path / "abalone_large.data"
    make_raw_frame(80, seed=7, zero_height=2).to_csv(path, header=False, index=False)
    return path


@pytest.fixture
def conf(tmp_path: Path, large_raw_file: Path) -> Config:
    return Config(
        source_url=str(large_raw_file),
        seed=13,
        bucket="test-bucket",
        role="arn:aws:iam::123456789012:role/SageMakerRole",
        max_rows_per_request=5,
        project_root=tmp_path / "project",
    )


# =========================
# In-memory collaborators
# =========================
class FakeObjectStore(ObjectStore):
    def __init__(self, bucket: str = "default-bucket"):
        self.bucket = bucket
        self.objects: Dict[str, str] = {}

    def default_bucket(self) -> str:
        return self.bucket

    def upload(self, local_path: Path, bucket: str, key_prefix: str) -> str:
        uri = f"s3://{bucket}/{key_prefix}/{Path(local_path).name}"
        self.objects[uri] = Path(local_path).read_text()
        return uri


class FakeEndpoint(Endpoint):
    """Predicts the sum of each row's fields, one value per line."""

    def __init__(self, name: str = "fake-endpoint", drop_last: bool = False):
        self.name = name
        self.drop_last = drop_last
        self.payloads: List[str] = []
        self.content_types: List[str] = []
        self.deleted = False

    def invoke(self, batch: str, content_type: str = "text/csv") -> str:
        self.payloads.append(batch)
        self.content_types.append(content_type)
        sums = [sum(float(v) for v in line.split(",")) for line in batch.splitlines()]
        if self.drop_last:
            sums = sums[:-1]
        return ",".join(repr(s) for s in sums)

    def delete(self) -> None:
        self.deleted = True


class FakeTrainingPlatform(TrainingPlatform):
    def __init__(self, endpoint: FakeEndpoint | None = None):
        self.endpoint = endpoint or FakeEndpoint()
        self.submitted: List[dict] = []
        self.deployed: List[InstanceSpec] = []

    def execution_role(self) -> str:
        return "arn:aws:iam::000000000000:role/default"

    def container_uri(self, version: str) -> str:
        return f"683313688378.dkr.ecr.us-east-1.amazonaws.com/sagemaker-xgboost:{version}"

    def submit(self, container, role, instance, hyperparameters, inputs, job_name, output_path) -> TrainingJob:
        self.submitted.append(dict(
            container=container, role=role, instance=instance,
            hyperparameters=hyperparameters, inputs=inputs,
            job_name=job_name, output_path=output_path,
        ))
        return TrainingJob(job_name=job_name, model_data=f"{output_path}/{job_name}/output/model.tar.gz")

    def deploy(self, job: TrainingJob, instance: InstanceSpec) -> Endpoint:
        self.deployed.append(instance)
        return self.endpoint


@pytest.fixture
def store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def endpoint() -> FakeEndpoint:
    return FakeEndpoint()


@pytest.fixture
def platform(endpoint: FakeEndpoint) -> FakeTrainingPlatform:
    return FakeTrainingPlatform(endpoint)
