"""
Prometheus metrics shared by all workflows.

Module-level metric objects are process-wide singletons. Workflows record
their own events through
[inc_counter()][interlang.core.base_workflow.BaseWorkflow.inc_counter]
when ``metrics.enabled`` is set in their configuration; exposition is left
to the hosting application (``prometheus_client.generate_latest`` or its
own HTTP endpoint).

Counter labels:
    workflow: Workflow name (``groups``, ``relations``, ``display``, ...).
    name: Event name, e.g. ``relations_replaced``, ``display_policy_reset``.
"""

from __future__ import annotations

from prometheus_client import Counter
from pydantic import BaseModel, Field


class MetricsConfig(BaseModel):
    """Whether a workflow records Prometheus counters."""

    enabled: bool = Field(default=False, description="Enable metrics collection")


WORKFLOW_COUNTER = Counter(
    "interlang_workflow_counter",
    "Workflow event counters (cumulative totals)",
    ["workflow", "name"],
)
