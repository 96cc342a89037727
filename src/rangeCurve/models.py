"""Pydantic models for curve samples and query results at the I/O boundary."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

from .curve import RangeCurve
from .interval_tree import MinMax


class CurveSamples(BaseModel):
    """Sampled curve data with validation."""

    model_config = ConfigDict(allow_inf_nan=False)

    x_values: list[float] = Field(..., min_length=1, description="Strictly increasing x values")
    y_values: list[float | None] = Field(..., description="y values, null marks a gap")

    @field_validator("x_values")
    @classmethod
    def x_must_be_strictly_increasing(cls, v):
        """Validate that x values are strictly increasing."""
        for i in range(1, len(v)):
            if v[i] <= v[i - 1]:
                msg = f"x values must be strictly increasing, x[{i}]={v[i]} <= x[{i - 1}]={v[i - 1]}"
                raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def lengths_must_match(self) -> CurveSamples:
        """Validate that every x value has exactly one y value."""
        if len(self.x_values) != len(self.y_values):
            msg = (
                f"x_values and y_values must have the same length, "
                f"got {len(self.x_values)} and {len(self.y_values)}"
            )
            raise ValueError(msg)
        return self

    @property
    def gap_count(self) -> int:
        return sum(1 for y in self.y_values if y is None)

    def to_curve(self) -> RangeCurve:
        """Build a RangeCurve sharing this model's lists."""
        return RangeCurve(self.x_values, self.y_values)


class DomainInterval(BaseModel):
    """Closed x-interval [xmin, xmax] to query."""

    model_config = ConfigDict(allow_inf_nan=False)

    xmin: float
    xmax: float

    @field_validator("xmax")
    @classmethod
    def xmax_not_below_xmin(cls, v, info):
        """Validate that the interval is not reversed."""
        xmin = info.data.get("xmin")
        if xmin is not None and v < xmin:
            msg = f"xmax ({v}) must be >= xmin ({xmin})"
            raise ValueError(msg)
        return v


class QueryResult(BaseModel):
    """Min/max of a curve over an interval; min and max are null when empty."""

    xmin: float
    xmax: float
    min: float | None = None
    max: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.min is None

    @classmethod
    def from_min_max(cls, interval: DomainInterval, min_max: MinMax | None) -> QueryResult:
        if min_max is None:
            return cls(xmin=interval.xmin, xmax=interval.xmax)
        return cls(xmin=interval.xmin, xmax=interval.xmax, min=min_max[0], max=min_max[1])

    def as_tuple(self) -> MinMax | None:
        if self.is_empty:
            return None
        return self.min, self.max
