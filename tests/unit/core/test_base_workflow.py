"""
Unit tests for core.base_workflow and core.metrics modules.

Tests:
- BaseWorkflowConfig defaults and validation
- Workflow construction with default and explicit config
- from_yaml() / from_dict() factories, extra keyword arguments included
- inc_counter() gated by metrics.enabled
"""

from typing import ClassVar
from unittest.mock import MagicMock

import pytest
import yaml
from prometheus_client import REGISTRY
from pydantic import Field, ValidationError

from interlang.core.base_workflow import BaseWorkflow, BaseWorkflowConfig
from interlang.core.metrics import MetricsConfig


class _SampleConfig(BaseWorkflowConfig):
    threshold: int = Field(default=3, ge=1)


class _SampleWorkflow(BaseWorkflow[_SampleConfig]):
    WORKFLOW_NAME: ClassVar[str] = "sample"
    CONFIG_CLASS: ClassVar[type[_SampleConfig]] = _SampleConfig

    def __init__(self, store, config=None, extra=None):
        super().__init__(store, config)
        self.extra = extra


def _counter_value(workflow: str, name: str) -> float:
    labels = {"workflow": workflow, "name": name}
    return REGISTRY.get_sample_value("interlang_workflow_counter_total", labels) or 0.0


class TestBaseWorkflowConfig:
    def test_defaults(self):
        config = BaseWorkflowConfig()
        assert config.metrics == MetricsConfig(enabled=False)
        assert config.json_logs is False

    def test_nested_dict(self):
        config = _SampleConfig(metrics={"enabled": True}, threshold=5)
        assert config.metrics.enabled is True
        assert config.threshold == 5

    def test_validation(self):
        with pytest.raises(ValidationError):
            _SampleConfig(threshold=0)


class TestBaseWorkflowInit:
    def test_default_config(self):
        store = MagicMock()
        workflow = _SampleWorkflow(store)
        assert workflow.store is store
        assert isinstance(workflow.config, _SampleConfig)
        assert workflow.config.threshold == 3

    def test_explicit_config(self):
        workflow = _SampleWorkflow(MagicMock(), _SampleConfig(threshold=9, json_logs=True))
        assert workflow.config.threshold == 9
        assert workflow._logger._json_output is True

    def test_logger_named_after_workflow(self):
        assert _SampleWorkflow(MagicMock())._logger.name == "sample"


class TestFactories:
    def test_from_dict(self):
        store = MagicMock()
        workflow = _SampleWorkflow.from_dict({"threshold": 4}, store=store, extra="x")
        assert workflow.config.threshold == 4
        assert workflow.store is store
        assert workflow.extra == "x"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "sample.yaml"
        path.write_text(yaml.safe_dump({"threshold": 7, "metrics": {"enabled": True}}))
        workflow = _SampleWorkflow.from_yaml(str(path), store=MagicMock())
        assert workflow.config.threshold == 7
        assert workflow.config.metrics.enabled is True

    def test_from_dict_invalid(self):
        with pytest.raises(ValidationError):
            _SampleWorkflow.from_dict({"threshold": -1}, store=MagicMock())


class TestIncCounter:
    def test_disabled_is_noop(self):
        before = _counter_value("sample", "noop_event")
        _SampleWorkflow(MagicMock()).inc_counter("noop_event")
        assert _counter_value("sample", "noop_event") == before

    def test_enabled_increments(self):
        config = _SampleConfig(metrics=MetricsConfig(enabled=True))
        workflow = _SampleWorkflow(MagicMock(), config)
        before = _counter_value("sample", "saved")
        workflow.inc_counter("saved")
        workflow.inc_counter("saved", 2)
        assert _counter_value("sample", "saved") == before + 3
