from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from abalone_sagemaker.config import Config
from abalone_sagemaker.data_eng.types import DataBundle
from abalone_sagemaker.data_eng.write_data import dump_csv
from .interfaces import Endpoint, InstanceSpec, ObjectStore, TrainingJob, TrainingPlatform

logger = logging.getLogger(__name__)


def make_job_name(prefix: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"{prefix}-{now:%H-%M-%S}"


def stage_training_data(
    store: ObjectStore,
    bundle: DataBundle,
    bucket: str,
    key_prefix: str,
    work_dir: Optional[Path] = None
) -> Dict[str, str]:
    """
    Write the train and validation frames as label-first headerless CSV
    and upload them. Returns the channel -> URI map the training job reads.
    """
    frames = {'train': bundle.train, 'validation': bundle.validate}

    if work_dir is not None:
        return {
            name: store.upload(dump_csv(df, Path(work_dir), name), bucket, key_prefix)
            for name, df in frames.items()
        }

    # files only live until the upload returns
    with tempfile.TemporaryDirectory() as tmp:
        return {
            name: store.upload(dump_csv(df, Path(tmp), name), bucket, key_prefix)
            for name, df in frames.items()
        }


def train_model(
    platform: TrainingPlatform,
    store: ObjectStore,
    bundle: DataBundle,
    conf: Config,
    work_dir: Optional[Path] = None
) -> TrainingJob:
    bucket = conf.bucket or store.default_bucket()
    role = conf.role or platform.execution_role()
    container = platform.container_uri(conf.xgboost_version)

    inputs = stage_training_data(store, bundle, bucket, conf.key_prefix, work_dir)
    logger.info(f"staged training data: {inputs}")

    instance = InstanceSpec(
        instance_type=conf.train_instance_type,
        instance_count=conf.instance_count,
        volume_size=conf.train_volume_size,
        max_run=conf.train_max_run,
    )
    job = platform.submit(
        container=container,
        role=role,
        instance=instance,
        hyperparameters=dict(conf.hyperparameters),
        inputs=inputs,
        job_name=make_job_name(conf.job_prefix),
        output_path=f"s3://{bucket}/{conf.output_prefix}",
    )
    logger.info(f"model artifact for {job.job_name}: {job.model_data}")
    return job


def deploy_model(platform: TrainingPlatform, job: TrainingJob, conf: Config) -> Endpoint:
    instance = InstanceSpec(instance_type=conf.hosting_instance_type, instance_count=conf.instance_count)
    return platform.deploy(job, instance)
