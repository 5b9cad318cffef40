"""External validation of clustering results against gold-standard classes.

Given predicted cluster assignments and true class labels, this module builds
the cluster x class contingency table and derives:
- Purity: share of records that belong to their cluster's majority class
- NMI: mutual information of the two partitions normalized by the mean of
  their entropies
- The best-matching gold-standard label of every cluster

References:
    http://nlp.stanford.edu/IR-book/html/htmledition/evaluation-of-clustering-1.html
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass

import numpy as np

from clustereval.core.clusters import Cluster, ClusterSet
from clustereval.core.config import ValidationSettings, get_validation_settings
from clustereval.core.exceptions import (
    ClusterValidationError,
    DegenerateEntropyError,
    EmptyDatasetError,
    UnknownClusterOrClassError,
)
from clustereval.schemas import ValidationMetrics, ValidationRecord
from clustereval.utils import get_logger

logger = get_logger(__name__)


@dataclass
class ContingencyTable:
    """Co-occurrence counts of predicted clusters and gold-standard classes.

    Every (cluster, class) pair is present, zero-overlap pairs included.
    Tables are built per validation call and never reused: cluster ids from
    different runs or folds are not comparable.
    """

    cluster_ids: tuple[int, ...]
    classes: tuple[Hashable, ...]
    counts: dict[tuple[int, Hashable], float]
    count_of_cluster: dict[int, float]
    count_of_class: dict[Hashable, float]
    n: int

    def count(self, cluster_id: int, label: Hashable) -> float:
        return self.counts[(cluster_id, label)]

    def to_array(self) -> np.ndarray:
        """Dense matrix with clusters as rows and classes as columns."""
        matrix = np.zeros((len(self.cluster_ids), len(self.classes)), dtype=np.float64)
        for i, cluster_id in enumerate(self.cluster_ids):
            for j, label in enumerate(self.classes):
                matrix[i, j] = self.counts[(cluster_id, label)]
        return matrix


def _as_cluster_map(clusters: ClusterSet | Mapping[int, Cluster]) -> dict[int, Cluster]:
    if isinstance(clusters, Mapping):
        return dict(clusters)
    return {cluster.cluster_id: cluster for cluster in clusters}


def _entropy(counts: Iterable[float], n: int) -> float:
    """Plug-in entropy (nats) of a frequency table; empty cells contribute 0."""
    log_n = math.log(n)
    entropy = 0.0
    for count in counts:
        if count > 0:
            entropy -= (count / n) * (math.log(count) - log_n)
    return entropy


def build_contingency_table(
    clusters: ClusterSet | Mapping[int, Cluster],
    gold_standard_classes: Iterable[Hashable],
    records: Iterable[ValidationRecord],
) -> ContingencyTable:
    """Count co-occurrences of predicted clusters and true classes.

    Args:
        clusters: Known clusters of the trained model
        gold_standard_classes: Known ground-truth classes, in tie-break order
        records: Validation records with predicted cluster and true label

    Returns:
        Dense ContingencyTable with marginal counts

    Raises:
        UnknownClusterOrClassError: A record references an unknown cluster or class
        EmptyDatasetError: No records were given
    """
    cluster_ids = tuple(_as_cluster_map(clusters))
    classes = tuple(dict.fromkeys(gold_standard_classes))

    counts: dict[tuple[int, Hashable], float] = {}
    count_of_cluster: dict[int, float] = {}
    count_of_class: dict[Hashable, float] = {label: 0.0 for label in classes}
    for cluster_id in cluster_ids:
        count_of_cluster[cluster_id] = 0.0
        for label in classes:
            counts[(cluster_id, label)] = 0.0

    n = 0
    for record in records:
        key = (record.predicted_cluster, record.true_label)
        if key not in counts:
            raise UnknownClusterOrClassError(
                f"Record {record.record_id!r} references a cluster or class "
                "outside the trained model",
                cluster_id=record.predicted_cluster,
                label=record.true_label,
            )
        counts[key] += 1.0
        count_of_cluster[record.predicted_cluster] += 1.0
        count_of_class[record.true_label] += 1.0
        n += 1

    if n == 0:
        raise EmptyDatasetError(
            "Cannot validate clustering on an empty dataset",
            {"clusters": len(cluster_ids), "classes": len(classes)},
        )

    return ContingencyTable(
        cluster_ids=cluster_ids,
        classes=classes,
        counts=counts,
        count_of_cluster=count_of_cluster,
        count_of_class=count_of_class,
        n=n,
    )


class ValidationEngine:
    """Computes Purity and NMI of a clustering and labels its clusters.

    The engine is synchronous and holds no state between calls. It writes the
    label of every cluster it validates, so concurrent calls on the same
    clusters must be serialized by the caller.

    Usage:
        engine = ValidationEngine()
        metrics = engine.validate_model(model, records)
    """

    def __init__(self, settings: ValidationSettings | None = None):
        """Initialize validation engine.

        Args:
            settings: Validation settings (defaults to the cached environment settings)
        """
        self.settings = settings or get_validation_settings()

    def validate(
        self,
        clusters: ClusterSet | Mapping[int, Cluster],
        gold_standard_classes: Iterable[Hashable],
        records: Iterable[ValidationRecord],
    ) -> ValidationMetrics:
        """Validate predicted cluster assignments against true classes.

        Without gold-standard classes the metrics are undefined: both stay
        None and no cluster is labelled.

        Args:
            clusters: Known clusters of the trained model
            gold_standard_classes: Known ground-truth classes, in tie-break order
            records: Validation records with predicted cluster and true label

        Returns:
            ValidationMetrics with purity and NMI
        """
        cluster_map = _as_cluster_map(clusters)
        classes = tuple(dict.fromkeys(gold_standard_classes))

        if not classes:
            logger.warning("No gold-standard classes available, skipping validation metrics")
            return ValidationMetrics()

        try:
            table = build_contingency_table(cluster_map, classes, records)
            metrics = self.compute_metrics(cluster_map, table)
        except ClusterValidationError as e:
            logger.error(f"Cluster validation failed: {e}")
            raise

        logger.info(
            f"Validated {table.n} records over {len(cluster_map)} clusters and "
            f"{len(classes)} classes: purity={metrics.purity}, nmi={metrics.nmi}"
        )
        return metrics

    def validate_model(
        self,
        model: ClusterSet,
        records: Iterable[ValidationRecord],
    ) -> ValidationMetrics:
        """Validate records against a model's clusters and gold-standard classes."""
        return self.validate(model, model.gold_standard_classes, records)

    def compute_metrics(
        self,
        clusters: ClusterSet | Mapping[int, Cluster],
        table: ContingencyTable,
    ) -> ValidationMetrics:
        """Derive purity and NMI from a contingency table and label each cluster.

        The label of a cluster is its most frequent class. Ties go to the class
        that comes first in gold-standard order, so a cluster without records
        receives the first class.

        Raises:
            DegenerateEntropyError: Both partitions have zero entropy
        """
        cluster_map = _as_cluster_map(clusters)
        n = table.n
        log_n = math.log(n)

        if self.settings.log_contingency_table:
            logger.debug(
                f"Contingency table (rows={list(table.cluster_ids)}, "
                f"cols={list(table.classes)}):\n{table.to_array()}"
            )

        purity = 0.0
        mutual_information = 0.0
        for cluster_id in table.cluster_ids:
            n_cluster = table.count_of_cluster[cluster_id]
            best_label = None
            max_count = -math.inf

            for label in table.classes:
                n_wc = table.counts[(cluster_id, label)]
                if n_wc > max_count:
                    max_count = n_wc
                    best_label = label

                if n_wc > 0:
                    mutual_information += (n_wc / n) * (
                        math.log(n_wc)
                        - math.log(table.count_of_class[label])
                        - math.log(n_cluster)
                        + log_n
                    )

            cluster_map[cluster_id]._set_label(best_label)
            purity += max_count

        purity /= n

        entropy_clusters = _entropy(table.count_of_cluster.values(), n)
        entropy_classes = _entropy(table.count_of_class.values(), n)
        entropy_sum = entropy_clusters + entropy_classes
        if entropy_sum <= 0.0:
            raise DegenerateEntropyError(
                "NMI is undefined: clusters and classes both have zero entropy",
                {"n": n, "clusters": len(table.cluster_ids), "classes": len(table.classes)},
            )

        nmi = mutual_information / (entropy_sum / 2.0)

        logger.debug(
            f"I={mutual_information:.6f}, H(clusters)={entropy_clusters:.6f}, "
            f"H(classes)={entropy_classes:.6f}"
        )

        precision = self.settings.metric_precision
        if precision is not None:
            purity = round(purity, precision)
            nmi = round(nmi, precision)

        return ValidationMetrics(purity=purity, nmi=nmi)


# Global engine instance
_validation_engine: ValidationEngine | None = None


def get_validation_engine() -> ValidationEngine:
    """Get global validation engine instance."""
    global _validation_engine
    if _validation_engine is None:
        _validation_engine = ValidationEngine()
    return _validation_engine
