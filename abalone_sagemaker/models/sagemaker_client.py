"""
SageMaker implementations of the storage, training and hosting collaborators.

Usage:
    session = sagemaker.Session()
    store = SageMakerObjectStore(session)
    platform = SageMakerTrainingPlatform(session)
    uri = store.upload(Path('train.csv'), store.default_bucket(), 'data')

Failures from the SDK or from botocore are re-raised as RemoteServiceError
with the original chained. Nothing here retries; that belongs to the SDK's
own client configuration.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import sagemaker
from botocore.exceptions import BotoCoreError, ClientError
from sagemaker.estimator import Estimator
from sagemaker.exceptions import UnexpectedStatusException
from sagemaker.inputs import TrainingInput
from sagemaker.serializers import CSVSerializer

from abalone_sagemaker.errors import RemoteServiceError
from .interfaces import Endpoint, InstanceSpec, ObjectStore, TrainingJob, TrainingPlatform

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (BotoCoreError, ClientError, UnexpectedStatusException)


@contextmanager
def remote_call(action: str) -> Iterator[None]:
    try:
        yield
    except REMOTE_ERRORS as e:
        logger.error(f"{action} failed: {e}")
        raise RemoteServiceError(f"{action} failed: {e}") from e


class SageMakerObjectStore(ObjectStore):
    def __init__(self, session: Optional[sagemaker.Session] = None):
        self.session = session or sagemaker.Session()

    def default_bucket(self) -> str:
        with remote_call("default bucket lookup"):
            return self.session.default_bucket()

    def upload(self, local_path: Path, bucket: str, key_prefix: str) -> str:
        logger.info(f"uploading {local_path} to s3://{bucket}/{key_prefix}")
        with remote_call(f"upload of {local_path}"):
            return self.session.upload_data(path=str(local_path), bucket=bucket, key_prefix=key_prefix)


class SageMakerEndpoint(Endpoint):
    def __init__(self, predictor: Any):
        self.predictor = predictor
        self.name = predictor.endpoint_name

    def invoke(self, batch: str, content_type: str = 'text/csv') -> str:
        with remote_call(f"invocation of endpoint {self.name}"):
            response = self.predictor.predict(batch, initial_args={'ContentType': content_type})
        if isinstance(response, (bytes, bytearray)):
            return response.decode('utf-8')
        return str(response)

    def delete(self) -> None:
        logger.info(f"deleting endpoint {self.name}")
        with remote_call(f"deletion of endpoint {self.name}"):
            self.predictor.delete_endpoint()


class SageMakerTrainingPlatform(TrainingPlatform):
    """
    Trains and hosts the built-in XGBoost container.

    The estimator created by submit() is kept on the returned TrainingJob so
    deploy() can reuse it; a job without one is re-attached by name.
    """

    def __init__(self, session: Optional[sagemaker.Session] = None, region: Optional[str] = None):
        self.session = session or sagemaker.Session()
        self.region = region or self.session.boto_region_name

    def execution_role(self) -> str:
        try:
            return sagemaker.get_execution_role(sagemaker_session=self.session)
        except (ValueError, *REMOTE_ERRORS) as e:
            raise RemoteServiceError(f"could not resolve an execution role: {e}") from e

    def container_uri(self, version: str) -> str:
        with remote_call("container lookup"):
            return sagemaker.image_uris.retrieve(framework='xgboost', region=self.region, version=version)

    def submit(
        self,
        container: str,
        role: str,
        instance: InstanceSpec,
        hyperparameters: Dict[str, Any],
        inputs: Dict[str, str],
        job_name: str,
        output_path: str,
    ) -> TrainingJob:
        estimator = Estimator(
            image_uri=container,
            role=role,
            instance_count=instance.instance_count,
            instance_type=instance.instance_type,
            volume_size=instance.volume_size,
            max_run=instance.max_run,
            input_mode='File',
            output_path=output_path,
            sagemaker_session=self.session,
        )
        estimator.set_hyperparameters(**hyperparameters)

        channels = {
            name: TrainingInput(s3_data=uri, content_type='text/csv')
            for name, uri in inputs.items()
        }
        logger.info(f"starting training job {job_name} with channels {list(channels)}")
        with remote_call(f"training job {job_name}"):
            estimator.fit(inputs=channels, job_name=job_name, wait=True)

        logger.info(f"training job {job_name} wrote {estimator.model_data}")
        return TrainingJob(job_name=job_name, model_data=estimator.model_data, handle=estimator)

    def deploy(self, job: TrainingJob, instance: InstanceSpec) -> Endpoint:
        with remote_call(f"deployment of {job.job_name}"):
            estimator = job.handle or Estimator.attach(job.job_name, sagemaker_session=self.session)
            predictor = estimator.deploy(
                initial_instance_count=instance.instance_count,
                instance_type=instance.instance_type,
                serializer=CSVSerializer(),
            )
        logger.info(f"deployed {job.job_name} to endpoint {predictor.endpoint_name}")
        return SageMakerEndpoint(predictor)
