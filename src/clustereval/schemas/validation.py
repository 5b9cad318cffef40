"""Validation input/output schemas."""

from collections.abc import Hashable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class ValidationRecord:
    """One validation datum: a predicted cluster and its true class.

    ``true_label`` is None for unlabelled records.
    """

    predicted_cluster: int
    true_label: Hashable | None = None
    record_id: int | None = None


class ValidationMetrics(BaseModel):
    """External cluster-quality metrics of one validation pass.

    Both fields stay None when no gold-standard classes are available.
    """

    model_config = ConfigDict(validate_assignment=True)

    purity: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Count-weighted share of records in their cluster's majority class",
    )
    nmi: float | None = Field(
        default=None,
        description="Mutual information normalized by the mean of both entropies",
    )

    @property
    def is_computed(self) -> bool:
        """Whether both metrics were derived."""
        return self.purity is not None and self.nmi is not None
