"""
SonarQube Web API response models.

Decoding is lenient about missing fields (they fall back to empty values)
but strict about shape: an object where a list is expected, or a list where
an object is expected, raises DecodeError.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import DecodeError


class MetricType(Enum):
    """Metric value types declared in the SonarQube metric catalog."""

    INT = "INT"
    FLOAT = "FLOAT"
    PERCENT = "PERCENT"
    RATING = "RATING"
    MILLISEC = "MILLISEC"
    WORK_DUR = "WORK_DUR"
    BOOL = "BOOL"
    STRING = "STRING"
    DATA = "DATA"
    DISTRIB = "DISTRIB"
    LEVEL = "LEVEL"
    OTHER = "OTHER"

    @classmethod
    def from_api(cls, value: str) -> "MetricType":
        """Map an API type string to a member; unknown strings become OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    @property
    def is_integer(self) -> bool:
        return self in (MetricType.INT, MetricType.MILLISEC, MetricType.WORK_DUR)

    @property
    def is_decimal(self) -> bool:
        return self in (MetricType.FLOAT, MetricType.PERCENT, MetricType.RATING)

    @property
    def is_numeric(self) -> bool:
        """Whether values of this type can be exposed as gauges."""
        return self.is_integer or self.is_decimal


def _expect_dict(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"expected object for {what}, got {type(value).__name__}")
    return value


def _expect_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"expected list for {what}, got {type(value).__name__}")
    return value


def _str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise DecodeError(f"expected string for '{key}', got {type(value).__name__}")
    return str(value)


def _int(data: Dict[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"expected integer for '{key}', got {value!r}")
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise DecodeError(f"expected integer for '{key}', got {value!r}")
    return int(value)


def _bool(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"expected boolean for '{key}', got {value!r}")
    return value


@dataclass(frozen=True)
class Metric:
    """A metric definition from /api/metrics/search."""

    key: str
    type: MetricType
    id: str = ""
    name: str = ""
    description: str = ""
    domain: str = ""
    direction: int = 0
    qualitative: bool = False
    hidden: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Metric":
        data = _expect_dict(data, "metric")
        return cls(
            key=_str(data, "key"),
            type=MetricType.from_api(_str(data, "type")),
            id=_str(data, "id"),
            name=_str(data, "name"),
            description=_str(data, "description"),
            domain=_str(data, "domain"),
            direction=_int(data, "direction"),
            qualitative=_bool(data, "qualitative"),
            hidden=_bool(data, "hidden"),
        )


@dataclass
class MetricsResponse:
    """Response of /api/metrics/search."""

    metrics: List[Metric] = field(default_factory=list)
    total: int = 0
    p: int = 0
    ps: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "MetricsResponse":
        data = _expect_dict(data, "metrics response")
        return cls(
            metrics=[Metric.from_dict(m) for m in _expect_list(data.get("metrics"), "metrics")],
            total=_int(data, "total"),
            p=_int(data, "p"),
            ps=_int(data, "ps"),
        )


@dataclass(frozen=True)
class Component:
    """A project returned by /api/components/search_projects."""

    key: str
    name: str = ""
    qualifier: str = ""
    visibility: str = ""
    is_favorite: bool = False
    analysis_date: Optional[str] = None
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Component":
        data = _expect_dict(data, "component")
        return cls(
            key=_str(data, "key"),
            name=_str(data, "name"),
            qualifier=_str(data, "qualifier"),
            visibility=_str(data, "visibility"),
            is_favorite=_bool(data, "isFavorite"),
            analysis_date=data.get("analysisDate") or None,
            tags=tuple(str(t) for t in _expect_list(data.get("tags"), "tags")),
        )


@dataclass
class Paging:
    """Pagination block of a search response."""

    page_index: int = 0
    page_size: int = 0
    total: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Paging":
        if data is None:
            return cls()
        data = _expect_dict(data, "paging")
        return cls(
            page_index=_int(data, "pageIndex"),
            page_size=_int(data, "pageSize"),
            total=_int(data, "total"),
        )


@dataclass
class ComponentsResponse:
    """Response of /api/components/search_projects."""

    paging: Paging = field(default_factory=Paging)
    components: List[Component] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ComponentsResponse":
        data = _expect_dict(data, "components response")
        return cls(
            paging=Paging.from_dict(data.get("paging")),
            components=[
                Component.from_dict(c)
                for c in _expect_list(data.get("components"), "components")
            ],
        )


@dataclass(frozen=True)
class Measure:
    """A single measure value. An empty value means no value recorded yet."""

    metric: str
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Measure":
        data = _expect_dict(data, "measure")
        return cls(metric=_str(data, "metric"), value=_str(data, "value"))


@dataclass
class MeasuresResponse:
    """Response of /api/measures/component."""

    key: str = ""
    name: str = ""
    measures: List[Measure] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "MeasuresResponse":
        data = _expect_dict(data, "measures response")
        component = data.get("component")
        if component is None:
            return cls()
        component = _expect_dict(component, "component")
        return cls(
            key=_str(component, "key"),
            name=_str(component, "name"),
            measures=[
                Measure.from_dict(m)
                for m in _expect_list(component.get("measures"), "measures")
            ],
        )
