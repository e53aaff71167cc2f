"""
Base class for interlang workflows.

``BaseWorkflow[ConfigT]`` gives every workflow the same construction pattern:
a shared [Store][interlang.core.store.Store], a typed Pydantic configuration,
a structured [Logger][interlang.core.logger.Logger] named after the workflow,
Prometheus counters, and the
[from_yaml()][interlang.core.base_workflow.BaseWorkflow.from_yaml] /
[from_dict()][interlang.core.base_workflow.BaseWorkflow.from_dict] factories.

Workflows are request-driven: the hosting application calls their methods
while handling an editor save or a page render. There is no run loop.

Examples:
    ```python
    store = Store.from_yaml("config/interlang.yaml")

    async with store:
        groups = SiteGroupsWorkflow.from_yaml("config/groups.yaml", store=store)
        await groups.save("site-en site-fr\\nsite-de site-it")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar, cast

from pydantic import BaseModel, Field

from .logger import Logger
from .metrics import WORKFLOW_COUNTER, MetricsConfig
from .yaml import load_yaml


if TYPE_CHECKING:
    from .store import Store


class BaseWorkflowConfig(BaseModel):
    """Base configuration shared by all workflows.

    Subclass it to add workflow-specific fields.
    """

    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Prometheus metrics configuration",
    )
    json_logs: bool = Field(default=False, description="Emit JSON log lines instead of key=value")


ConfigT = TypeVar("ConfigT", bound=BaseWorkflowConfig)


class BaseWorkflow(Generic[ConfigT]):
    """Base class for all interlang workflows.

    Subclasses set ``WORKFLOW_NAME`` (used in logs and metric labels) and
    ``CONFIG_CLASS`` (parsed by the factories).

    Attributes:
        WORKFLOW_NAME: Unique workflow identifier.
        CONFIG_CLASS: Pydantic model class for the configuration.
        _store: [Store][interlang.core.store.Store] used for all I/O.
        _config: Typed configuration (defaults from ``CONFIG_CLASS``).
        _logger: [Logger][interlang.core.logger.Logger] named after the workflow.
    """

    WORKFLOW_NAME: ClassVar[str]
    CONFIG_CLASS: ClassVar[type[BaseWorkflowConfig]]

    def __init__(self, store: Store, config: ConfigT | None = None) -> None:
        self._store = store
        self._config: ConfigT = (
            config if config is not None else cast("ConfigT", self.CONFIG_CLASS())
        )
        self._logger = Logger(self.WORKFLOW_NAME, json_output=self._config.json_logs)

    @property
    def config(self) -> ConfigT:
        """The typed workflow configuration (read-only)."""
        return self._config

    @property
    def store(self) -> Store:
        """The database facade this workflow runs against."""
        return self._store

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, config_path: str, store: Store, **kwargs: Any) -> Self:
        """Create a workflow from a YAML configuration file."""
        return cls.from_dict(load_yaml(config_path), store=store, **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any], store: Store, **kwargs: Any) -> Self:
        """Create a workflow from a dictionary parsed into ``CONFIG_CLASS``."""
        config = cast("ConfigT", cls.CONFIG_CLASS(**data))
        return cls(store=store, config=config, **kwargs)

    # -------------------------------------------------------------------------
    # Custom Metrics
    # -------------------------------------------------------------------------

    def inc_counter(self, name: str, value: float = 1) -> None:
        """Increment a named counter for this workflow.

        No-op when ``metrics.enabled`` is false.

        Args:
            name: Event name (e.g. ``"relations_replaced"``).
            value: Amount to add (default: 1).
        """
        if not self._config.metrics.enabled:
            return
        WORKFLOW_COUNTER.labels(workflow=self.WORKFLOW_NAME, name=name).inc(value)
