"""clustereval - external validation metrics for clustering models."""

__version__ = "0.1.0"
