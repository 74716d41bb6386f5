"""Shared test fixtures for ext-dts."""

import json

import pytest

from extdts.config.models import ExtDtsConfig
from helpers import DOC_URL, cfg, class_record, method, param, prop


@pytest.fixture
def write_export(tmp_path):
    """Write raw class records into a JSDuck-style export directory."""
    export_dir = tmp_path / "docs"
    export_dir.mkdir()

    def _write(*records, extra_files=None):
        for raw in records:
            (export_dir / f"{raw['name']}.json").write_text(json.dumps(raw))
        for filename, content in (extra_files or {}).items():
            (export_dir / filename).write_text(content)
        return export_dir

    return _write


@pytest.fixture
def sample_records():
    """A small hierarchy: Base <- Component <- Panel, plus a singleton and an enum."""
    return [
        class_record(
            "Ext.Base",
            members=[
                method("constructor", [param("config", "Object", optional=True)]),
                method("getId", returns=param("return", "String")),
            ],
        ),
        class_record(
            "Ext.Component",
            extends="Ext.Base",
            alternateClassNames=["Ext.AbstractComponent"],
            members=[
                cfg("id", "String"),
                cfg("renderTo", "String/HTMLElement/Ext.Element"),
                prop("rendered", "Boolean"),
                method("constructor", [param("config", "Object", optional=True)]),
                method("getId", returns=param("return", "String")),
                method("show", [param("animateTarget", "String/Ext.Element", optional=True)],
                       returns=param("return", "Ext.Component")),
            ],
        ),
        class_record(
            "Ext.panel.Panel",
            extends="Ext.Component",
            members=[
                cfg("id", "String"),
                cfg("title", "String", required=True),
                prop("rendered", "Boolean"),
                method("constructor", [param("config", "Object", optional=True)]),
                method("setTitle", [param("title", "String")], returns=param("return", "Ext.panel.Panel")),
            ],
        ),
        class_record(
            "Ext.Element",
            members=[method("getHeight", returns=param("return", "Number"))],
        ),
        class_record(
            "Ext.ComponentManager",
            singleton=True,
            members=[method("get", [param("id", "String")], returns=param("return", "Ext.Component"))],
        ),
        class_record("Ext.enums.Layout", enum={"type": "String"}),
    ]


@pytest.fixture
def sample_config(tmp_path):
    config = ExtDtsConfig()
    return config.model_copy(
        update={
            "output": config.output.model_copy(update={"base_dir": str(tmp_path / "build")}),
            "emitter": config.emitter.model_copy(update={"doc_url": DOC_URL}),
        }
    )
