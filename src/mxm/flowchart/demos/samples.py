"""
Sample flowcharts for mxm-flowchart.

These sources cover every flow direction plus the directive lines the parser
skips. They are used by the CLI (`list`, `render --sample`) and smoke tests.
"""

from __future__ import annotations

__all__ = ["build_samples"]

_PIPELINE = """\
flowchart LR
    %% fetch -> transform -> publish
    fetch[Fetch data] --> clean[Clean] --> publish[Publish]
    clean --> report[Report]
"""

_FAN_IN = """\
flowchart TB
    A[Extract] --> B[Prices]
    A --> C[Volumes]
    B --> D[Join]
    C --> D
"""

_RETURNS = """\
flowchart RL
    raw[Raw quotes] --> adj[Adjusted] --> ret[Returns]
"""

_BOTTOM_UP = """\
flowchart BT
    base[Foundation] --> mid[Services] --> top[Dashboard]
"""

_GROUPED = """\
flowchart LR
    subgraph ingest
        direction TB
        src[Source] --> stage[Staging]
    end
    stage --> wh[Warehouse]
    classDef hot fill:#f96
    class wh hot
"""


def build_samples() -> dict[str, str]:
    """Build the sample catalogue (name -> flowchart source)."""
    return {
        "pipeline": _PIPELINE,
        "fan-in": _FAN_IN,
        "returns": _RETURNS,
        "bottom-up": _BOTTOM_UP,
        "grouped": _GROUPED,
    }
