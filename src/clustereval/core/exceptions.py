"""Exceptions raised by cluster validation.

All errors inherit from ClusterValidationError so callers can handle
malformed validation input in one place. None of them are transient:
they indicate bad input tables upstream and are never retried.
"""


class ClusterValidationError(Exception):
    """Base exception for all clustereval errors.

    Attributes:
        message: Human-readable error description.
        details: Additional error context.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmptyDatasetError(ClusterValidationError):
    """Raised when validation is attempted on zero records."""

    pass


class DegenerateEntropyError(ClusterValidationError):
    """Raised when H(clusters) + H(classes) is zero and NMI is undefined.

    This happens when all records fall in a single cluster and a single class.
    """

    pass


class UnknownClusterOrClassError(ClusterValidationError):
    """Raised when a record references a cluster id or class outside the model.

    Attributes:
        cluster_id: Predicted cluster id of the offending record.
        label: True class of the offending record.
    """

    def __init__(self, message: str, cluster_id: object, label: object) -> None:
        self.cluster_id = cluster_id
        self.label = label
        super().__init__(message, {"cluster_id": cluster_id, "label": label})


class DuplicateClusterError(ClusterValidationError):
    """Raised when a cluster id is registered twice in a ClusterSet."""

    pass


class DatasetFormatError(ClusterValidationError):
    """Raised when a validation dataset row is malformed."""

    pass
