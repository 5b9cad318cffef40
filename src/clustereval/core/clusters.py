"""Cluster containers of a trained clustering model.

A Cluster owns its member record ids and the gold-standard label assigned to
it by validation. A ClusterSet is the model's parameter object: the clusters
keyed by id plus the gold-standard classes seen during training.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator

from clustereval.core.exceptions import DuplicateClusterError
from clustereval.schemas import ValidationRecord
from clustereval.utils import get_logger

logger = get_logger(__name__)


class Cluster:
    """A single cluster identified by an immutable integer id.

    Equality and hashing use only the cluster id. The label is None until a
    validation pass assigns the best-matching gold-standard class; the
    validation engine is its only writer.
    """

    __slots__ = ("_cluster_id", "_record_ids", "_label")

    def __init__(self, cluster_id: int, record_ids: Iterable[int] | None = None):
        self._cluster_id = int(cluster_id)
        self._record_ids: set[int] = set(record_ids or ())
        self._label: Hashable | None = None

    @property
    def cluster_id(self) -> int:
        return self._cluster_id

    @property
    def record_ids(self) -> frozenset[int]:
        """Read-only view of the member record ids."""
        return frozenset(self._record_ids)

    @property
    def label(self) -> Hashable | None:
        """Gold-standard class assigned by the last validation pass."""
        return self._label

    @property
    def size(self) -> int:
        return len(self._record_ids)

    def add(self, record_id: int) -> bool:
        """Add a record to the cluster. Returns False if already a member."""
        if record_id in self._record_ids:
            return False
        self._record_ids.add(record_id)
        return True

    def remove(self, record_id: int) -> bool:
        """Remove a record from the cluster. Returns False if not a member."""
        if record_id not in self._record_ids:
            return False
        self._record_ids.remove(record_id)
        return True

    def clear(self) -> None:
        """Drop all member records."""
        self._record_ids.clear()

    def _set_label(self, label: Hashable | None) -> None:
        self._label = label

    def __len__(self) -> int:
        return len(self._record_ids)

    def __iter__(self) -> Iterator[int]:
        # Iterate over a snapshot so callers cannot mutate membership mid-loop
        return iter(tuple(self._record_ids))

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._record_ids

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cluster):
            return NotImplemented
        return type(self) is type(other) and self._cluster_id == other._cluster_id

    def __hash__(self) -> int:
        return hash((Cluster, self._cluster_id))

    def __repr__(self) -> str:
        return f"Cluster(cluster_id={self._cluster_id}, size={self.size}, label={self._label!r})"


class ClusterSet:
    """Clusters of a trained model keyed by id, plus its gold-standard classes.

    Gold-standard classes keep insertion order; that order is the tie-break
    order used when labelling clusters.

    Usage:
        model = ClusterSet(gold_standard_classes=["a", "b"])
        model.add_cluster(Cluster(0))
    """

    def __init__(
        self,
        clusters: Iterable[Cluster] | None = None,
        gold_standard_classes: Iterable[Hashable] | None = None,
    ):
        self._clusters: dict[int, Cluster] = {}
        self._gold_standard_classes: dict[Hashable, None] = {}
        for cluster in clusters or ():
            self.add_cluster(cluster)
        for label in gold_standard_classes or ():
            self.add_gold_standard_class(label)

    @classmethod
    def from_records(cls, records: Iterable[ValidationRecord]) -> ClusterSet:
        """Build a cluster set from labelled cluster assignments.

        One cluster is created per distinct predicted id. Records carrying a
        record_id become members of their cluster, and every non-None label
        is registered as a gold-standard class in first-seen order.
        """
        model = cls()
        for record in records:
            cluster = model.get(record.predicted_cluster)
            if cluster is None:
                cluster = Cluster(record.predicted_cluster)
                model.add_cluster(cluster)
            if record.record_id is not None:
                cluster.add(record.record_id)
            if record.true_label is not None:
                model.add_gold_standard_class(record.true_label)

        logger.debug(
            f"Built cluster set with {model.n_clusters} clusters and "
            f"{len(model.gold_standard_classes)} gold-standard classes"
        )
        return model

    @property
    def clusters(self) -> dict[int, Cluster]:
        """Mapping of cluster id to cluster (a copy)."""
        return dict(self._clusters)

    @property
    def gold_standard_classes(self) -> tuple[Hashable, ...]:
        """Known ground-truth classes in insertion order."""
        return tuple(self._gold_standard_classes)

    @property
    def n_clusters(self) -> int:
        return len(self._clusters)

    def add_cluster(self, cluster: Cluster) -> None:
        """Register a cluster. Raises DuplicateClusterError on id collision."""
        if cluster.cluster_id in self._clusters:
            raise DuplicateClusterError(
                f"Cluster id {cluster.cluster_id} is already registered",
                {"cluster_id": cluster.cluster_id},
            )
        self._clusters[cluster.cluster_id] = cluster

    def add_gold_standard_class(self, label: Hashable) -> None:
        """Register a ground-truth class; repeated labels keep their first position."""
        self._gold_standard_classes.setdefault(label, None)

    def get(self, cluster_id: int) -> Cluster | None:
        return self._clusters.get(cluster_id)

    def labels(self) -> dict[int, Hashable | None]:
        """Assigned label per cluster id."""
        return {cluster_id: cluster.label for cluster_id, cluster in self._clusters.items()}

    def __getitem__(self, cluster_id: int) -> Cluster:
        return self._clusters[cluster_id]

    def __contains__(self, cluster_id: object) -> bool:
        return cluster_id in self._clusters

    def __iter__(self) -> Iterator[Cluster]:
        return iter(tuple(self._clusters.values()))

    def __len__(self) -> int:
        return len(self._clusters)
