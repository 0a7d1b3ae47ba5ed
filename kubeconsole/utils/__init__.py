"""Utility functions and classes for the kubeconsole TUI."""

from kubeconsole.utils.exporter import export_filename, export_rows
from kubeconsole.utils.resource_parser import (
    memory_str_to_bytes,
    parse_count,
    parse_cpu,
    parse_cpu_millicores,
    parse_memory_bytes,
)
from kubeconsole.utils.task_supervisor import TaskSupervisor

__all__ = [
    # Export
    "export_filename",
    "export_rows",
    # Parsing
    "memory_str_to_bytes",
    "parse_count",
    "parse_cpu",
    "parse_cpu_millicores",
    "parse_memory_bytes",
    # Background tasks
    "TaskSupervisor",
]
