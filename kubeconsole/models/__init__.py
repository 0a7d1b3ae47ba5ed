"""Data models for the kubeconsole TUI."""
