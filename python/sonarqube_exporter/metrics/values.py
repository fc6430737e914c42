"""Conversion of SonarQube measure values and metric keys for Prometheus."""

import re

from ..sonarqube.models import MetricType

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class ParseError(ValueError):
    """Measure value is inconsistent with the metric's declared type."""


def sanitize_metric_name(key: str) -> str:
    """
    Convert a SonarQube metric key to a Prometheus metric name fragment.

    Lowercases the key and replaces '-' and '.' with '_'. Idempotent.
    """
    return key.lower().replace("-", "_").replace(".", "_")


def parse_metric_value(value: str, metric_type: MetricType) -> float:
    """
    Parse a measure value according to its declared metric type.

    An empty value means the metric has no value yet and is reported as 0
    for every type. Ratings arrive as numeric strings (1.0 = A ... 5.0 = E).
    Work durations are minutes, durations in MILLISEC are milliseconds;
    neither is converted.

    Args:
        value: Raw value string from the measures API
        metric_type: Declared type from the metric catalog

    Returns:
        Parsed value. Non-numeric types yield 0.

    Raises:
        ParseError: If the value does not match the declared numeric type.
    """
    if value == "":
        return 0.0

    if metric_type.is_integer:
        if not _INTEGER_RE.fullmatch(value):
            raise ParseError(f"invalid integer value {value!r} for type {metric_type.value}")
        return float(int(value))

    if metric_type.is_decimal:
        # float() also accepts surrounding whitespace and digit separators
        if value != value.strip() or "_" in value:
            raise ParseError(f"invalid decimal value {value!r} for type {metric_type.value}")
        try:
            return float(value)
        except ValueError:
            raise ParseError(f"invalid decimal value {value!r} for type {metric_type.value}")

    return 0.0
