"""
Abalone age regression on SageMaker: prepare the UCI abalone data, train the
built-in XGBoost container, deploy it and read predictions back.
"""
__version__ = "0.1.0"
