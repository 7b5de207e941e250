import logging

from abalone_sagemaker.config import Config
from .fetch_data import fetch_and_save
from .clean_data import cleaning_pipeline
from .engineer_features import make_features
from .get_data import load_data_bundle
from .types import DataBundle
from .write_data import dump_csvs
from abalone_sagemaker.visualization.eval_plots import save_figure
from abalone_sagemaker.visualization.feature_plots import plot_rings_vs_height

logger = logging.getLogger(__name__)


def run_data_pipeline(
    conf: Config
) -> DataBundle:

    logger.info(f'begin fetching data from {conf.source_url}')
    raw = fetch_and_save(conf.source_url, conf.raw_path)

    # zero-height rows stand out here before cleaning removes them
    if conf.save_plots:
        conf.plots_path.mkdir(parents=True, exist_ok=True)
        save_figure(plot_rings_vs_height(raw), conf.plots_path / 'rings_vs_height.png')

    logger.info('begin data cleaning')
    cleaned = cleaning_pipeline(raw)

    # sex -> female/male/infant indicators, rings moved to the first column
    logger.info('begin feature engineering')
    features = make_features(cleaned)

    bundle = load_data_bundle(features, conf)
    logger.info(f'split sizes: {bundle.sizes()}')

    # headerless, label first: the layout the xgboost container trains on
    dump_csvs(
        {'train': bundle.train, 'validation': bundle.validate, 'test': bundle.test},
        conf.processed_data_path
    )
    return bundle
