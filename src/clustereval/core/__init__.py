"""Core validation logic.

This module contains:
- config: Settings management
- clusters: Cluster and ClusterSet containers
- validation: Contingency table, purity/NMI engine
- dataset: Validation record loading
- exceptions: Error types
"""

from .clusters import Cluster, ClusterSet
from .config import (
    AppSettings,
    ValidationSettings,
    configure_logging,
    get_app_settings,
    get_validation_settings,
    reload_all_settings,
)
from .dataset import load_validation_records, record_from_row
from .exceptions import (
    ClusterValidationError,
    DatasetFormatError,
    DegenerateEntropyError,
    DuplicateClusterError,
    EmptyDatasetError,
    UnknownClusterOrClassError,
)
from .validation import (
    ContingencyTable,
    ValidationEngine,
    build_contingency_table,
    get_validation_engine,
)

__all__ = [
    # Config
    "AppSettings",
    "ValidationSettings",
    "configure_logging",
    "get_app_settings",
    "get_validation_settings",
    "reload_all_settings",
    # Clusters
    "Cluster",
    "ClusterSet",
    # Validation
    "ContingencyTable",
    "ValidationEngine",
    "build_contingency_table",
    "get_validation_engine",
    # Dataset
    "load_validation_records",
    "record_from_row",
    # Errors
    "ClusterValidationError",
    "DatasetFormatError",
    "DegenerateEntropyError",
    "DuplicateClusterError",
    "EmptyDatasetError",
    "UnknownClusterOrClassError",
]
