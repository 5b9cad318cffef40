import pytest

from clustereval.core.clusters import Cluster, ClusterSet
from clustereval.core.exceptions import DuplicateClusterError
from clustereval.schemas import ValidationRecord


def test_cluster_equality_and_hash_use_only_id():
    a = Cluster(3, record_ids=[1, 2])
    b = Cluster(3)
    b._set_label("other")

    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != Cluster(4, record_ids=[1, 2])


def test_cluster_membership_operations():
    cluster = Cluster(0)

    assert cluster.add(10) is True
    assert cluster.add(10) is False
    assert cluster.add(11) is True
    assert cluster.size == 2
    assert len(cluster) == 2
    assert 10 in cluster

    assert cluster.remove(10) is True
    assert cluster.remove(10) is False
    assert cluster.record_ids == frozenset({11})

    cluster.clear()
    assert cluster.size == 0


def test_cluster_iteration_is_read_only():
    cluster = Cluster(0, record_ids=[1, 2, 3])

    view = cluster.record_ids
    assert isinstance(view, frozenset)
    with pytest.raises(AttributeError):
        view.add(4)

    # Mutating during iteration is safe: iteration works on a snapshot
    for record_id in cluster:
        cluster.remove(record_id)
    assert cluster.size == 0


def test_cluster_label_starts_unset_and_is_not_assignable():
    cluster = Cluster(0)

    assert cluster.label is None
    with pytest.raises(AttributeError):
        cluster.label = "a"


def test_cluster_set_rejects_duplicate_ids():
    model = ClusterSet(clusters=[Cluster(1)])

    with pytest.raises(DuplicateClusterError):
        model.add_cluster(Cluster(1))
    assert model.n_clusters == 1


def test_gold_standard_classes_keep_insertion_order():
    model = ClusterSet(gold_standard_classes=["b", "a", "b", "c"])
    model.add_gold_standard_class("a")

    assert model.gold_standard_classes == ("b", "a", "c")


def test_cluster_set_from_records():
    records = [
        ValidationRecord(predicted_cluster=2, true_label="rag", record_id=1),
        ValidationRecord(predicted_cluster=0, true_label="agent", record_id=2),
        ValidationRecord(predicted_cluster=2, true_label=None, record_id=3),
        ValidationRecord(predicted_cluster=0, true_label="rag"),
    ]

    model = ClusterSet.from_records(records)

    assert model.n_clusters == 2
    assert 2 in model and 0 in model
    assert model[2].record_ids == frozenset({1, 3})
    assert model[0].record_ids == frozenset({2})
    assert model.gold_standard_classes == ("rag", "agent")
    assert model.get(5) is None


def test_cluster_set_clusters_returns_copy():
    model = ClusterSet(clusters=[Cluster(0)])

    clusters = model.clusters
    clusters[1] = Cluster(1)

    assert len(model) == 1
    assert [c.cluster_id for c in model] == [0]
