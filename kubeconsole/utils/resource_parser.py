"""Resource parsing utilities for Kubernetes quantities.

Converts quantity strings into the integer units the snapshot models use:
- CPU: millicores
- Memory and storage: bytes
- Extended resources (NPU chips, pods): plain counts
"""

from __future__ import annotations

from typing import Any

# Binary suffixes are checked before decimal ones so "Mi" never matches "M".
_MEMORY_BYTES_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ki", 1024),
    ("Mi", 1024**2),
    ("Gi", 1024**3),
    ("Ti", 1024**4),
    ("Pi", 1024**5),
    ("Ei", 1024**6),
    ("k", 1000),
    ("K", 1000),
    ("M", 1000**2),
    ("G", 1000**3),
    ("T", 1000**4),
    ("P", 1000**5),
    ("E", 1000**6),
)


def parse_cpu(cpu_str: Any) -> float:
    """Parse CPU string to cores (float).

    Handles various CPU resource formats:
    - Nanocores: "500000000n" -> 0.5 cores
    - Microcores: "500000u" -> 0.5 cores
    - Millicores: "100m" -> 0.1 cores
    - Decimal: "1.5" -> 1.5 cores

    Returns:
        CPU value in cores. Returns 0.0 on parse error or empty input.
    """
    if cpu_str is None or cpu_str == "":
        return 0.0
    if isinstance(cpu_str, (int, float)):
        return float(cpu_str)

    cpu_str = str(cpu_str).strip()
    divisors = {"n": 1_000_000_000, "u": 1_000_000, "m": 1000}
    try:
        if cpu_str and cpu_str[-1] in divisors:
            return float(cpu_str[:-1]) / divisors[cpu_str[-1]]
        return float(cpu_str)
    except ValueError:
        return 0.0


def parse_cpu_millicores(cpu_str: Any) -> int:
    """Parse a CPU quantity into whole millicores."""
    return round(parse_cpu(cpu_str) * 1000)


def memory_str_to_bytes(memory_str: Any) -> float:
    """Convert memory string to bytes.

    Handles binary ("512Mi", "1Gi") and decimal ("500M", "1G") suffixes as
    well as plain byte counts.

    Returns:
        Memory value in bytes. Returns 0.0 on parse error or empty input.
    """
    if memory_str is None or memory_str == "":
        return 0.0
    if isinstance(memory_str, (int, float)):
        return float(memory_str)

    memory_str = str(memory_str).strip()
    for suffix, mult in _MEMORY_BYTES_MULTIPLIERS:
        if memory_str.endswith(suffix):
            try:
                return float(memory_str[: -len(suffix)]) * mult
            except ValueError:
                return 0.0

    try:
        return float(memory_str)
    except ValueError:
        return 0.0


def parse_memory_bytes(memory_str: Any) -> int:
    return int(memory_str_to_bytes(memory_str))


def parse_count(value: Any) -> int:
    """Parse an extended-resource count such as ``"8"``; bad input is 0."""
    if value is None or value == "":
        return 0
    try:
        return int(float(str(value).strip()))
    except ValueError:
        return 0
