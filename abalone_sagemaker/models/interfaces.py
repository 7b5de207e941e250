from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class InstanceSpec:
    instance_type: str
    instance_count: int = 1
    volume_size: int = 30       # GB, training only
    max_run: int = 3600         # seconds, training only


@dataclass
class TrainingJob:
    job_name: str
    model_data: str             # URI of the model artifact
    handle: Optional[Any] = None


class ObjectStore:
    def default_bucket(self) -> str:
        raise NotImplementedError

    def upload(self, local_path: Path, bucket: str, key_prefix: str) -> str:
        """Store a local file under bucket/key_prefix and return its URI."""
        raise NotImplementedError


class Endpoint:
    name: str

    def invoke(self, batch: str, content_type: str = 'text/csv') -> str:
        raise NotImplementedError

    def delete(self) -> None:
        raise NotImplementedError


class TrainingPlatform:
    def execution_role(self) -> str:
        raise NotImplementedError

    def container_uri(self, version: str) -> str:
        raise NotImplementedError

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
        """Run a training job to completion; blocks until the artifact exists."""
        raise NotImplementedError

    def deploy(self, job: TrainingJob, instance: InstanceSpec) -> Endpoint:
        raise NotImplementedError
