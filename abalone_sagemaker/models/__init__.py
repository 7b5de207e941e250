# Storage, training and hosting collaborators
"""
The managed platform is reached only through the base classes in
interfaces.py; sagemaker_client.py implements them over the SageMaker SDK.
"""
from .interfaces import Endpoint, InstanceSpec, ObjectStore, TrainingJob, TrainingPlatform
from .training import deploy_model, make_job_name, stage_training_data, train_model
