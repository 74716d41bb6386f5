"""Raw JSDuck record builders shared by the test modules."""

from datetime import datetime, timezone

from extdts.config.models import EmitterConfig
from extdts.emitter import DeclarationEmitter
from extdts.registry import ClassRecord, ClassRegistry

DOC_URL = "http://docs.example.test/#!/api/"
GENERATED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def class_record(name, members=(), **extra):
    """Raw JSDuck class record as found on disk."""
    raw = {
        "tagname": "class",
        "name": name,
        "alternateClassNames": [],
        "extends": "",
        "singleton": False,
        "members": list(members),
        "mixins": [],
        "short_doc": f"The {name} class.",
    }
    raw.update(extra)
    return raw


def prop(name, type="String", **extra):
    return {"tagname": "property", "name": name, "type": type, "owner": "", **extra}


def cfg(name, type="String", **extra):
    return {"tagname": "cfg", "name": name, "type": type, "owner": "", **extra}


def method(name, params=(), returns=None, **extra):
    raw = {"tagname": "method", "name": name, "params": list(params), "owner": "", **extra}
    if returns is not None:
        raw["return"] = returns
    return raw


def param(name, type="String", **extra):
    return {"name": name, "type": type, **extra}


def build_registry(*records):
    return ClassRegistry(ClassRecord.model_validate(r) for r in records)


def build_emitter(*records):
    return DeclarationEmitter(build_registry(*records), EmitterConfig(doc_url=DOC_URL))
