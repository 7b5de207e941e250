from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

import pandas as pd

from abalone_sagemaker.config import Config
from abalone_sagemaker.data_eng.pipeline import run_data_pipeline
from abalone_sagemaker.data_eng.types import DataBundle
from abalone_sagemaker.eval.metrics import format_metrics, metrics_frame
from abalone_sagemaker.eval.predictor import RingsPredictor
from abalone_sagemaker.models.interfaces import ObjectStore, TrainingJob, TrainingPlatform
from abalone_sagemaker.models.training import deploy_model, train_model
from abalone_sagemaker.visualization.eval_plots import plot_predicted_vs_actual, save_figure

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    bundle: DataBundle
    job: TrainingJob
    endpoint_name: str
    predictions: pd.DataFrame
    metrics: Dict[str, Any]
    endpoint_deleted: bool


def run_pipeline(
    conf: Config,
    store: ObjectStore,
    platform: TrainingPlatform
) -> PipelineResult:
    """
    Raw data -> trained model -> endpoint -> predictions for the test split.

    Any failure stops the run at the failing stage. An endpoint that was
    already deployed is left running in that case and must be deleted by
    the caller; its name is logged at deployment.
    """
    bundle = run_data_pipeline(conf)

    logger.info('begin training')
    job = train_model(platform, store, bundle, conf)

    logger.info('deploying model')
    endpoint = deploy_model(platform, job, conf)

    predictor = RingsPredictor(endpoint=endpoint, max_rows=conf.max_rows_per_request)
    try:
        predictions = predictor.run(bundle.test)
    except Exception:
        logger.error(f'prediction failed, endpoint {endpoint.name} is still running')
        raise

    metrics = predictor.metrics or {}
    logger.info(f'test metrics: {metrics}')

    conf.data_dir.mkdir(parents=True, exist_ok=True)
    metrics_frame(metrics, job.job_name).to_csv(conf.data_dir / 'test_metrics.csv', index=False)
    if conf.save_plots:
        conf.plots_path.mkdir(parents=True, exist_ok=True)
        save_figure(
            plot_predicted_vs_actual(predictions, title=f'{job.job_name} (TEST)'),
            conf.plots_path / 'predicted_vs_actual.png'
        )

    if conf.delete_endpoint:
        endpoint.delete()

    return PipelineResult(
        bundle=bundle,
        job=job,
        endpoint_name=endpoint.name,
        predictions=predictions,
        metrics=metrics,
        endpoint_deleted=conf.delete_endpoint,
    )


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # imported here so the data pipeline works without AWS credentials
    import sagemaker
    from abalone_sagemaker.models.sagemaker_client import SageMakerObjectStore, SageMakerTrainingPlatform

    conf = Config(save_plots=True)
    session = sagemaker.Session()
    result = run_pipeline(
        conf,
        SageMakerObjectStore(session),
        SageMakerTrainingPlatform(session, region=conf.region),
    )

    print("\n" + "="*50)
    print("Pipeline Complete")
    print("="*50)
    print(f"Training job: {result.job.job_name}")
    print(f"Model artifact: {result.job.model_data}")
    print(f"Endpoint: {result.endpoint_name} ({'deleted' if result.endpoint_deleted else 'running'})")
    print(f"Split sizes: {result.bundle.sizes()}")
    print(result.predictions.head())
    print(format_metrics(result.metrics))


if __name__ == "__main__":
    main()
