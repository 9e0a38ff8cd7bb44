"""Core (UI-agnostic) operations dashboard logic.

This package contains:
- status / time / progress normalization (pure functions)
- record builders (raw store rows -> frozen dataclasses)
- data loading (remote store -> per-dataset state)
- read views (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
