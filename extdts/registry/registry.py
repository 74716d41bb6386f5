"""Class registry built from a JSDuck export directory."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from pydantic import ValidationError

from extdts.config.models import RegistryConfig
from extdts.registry.models import ClassRecord, MemberRecord, Module, SchemaMismatchError

logger = logging.getLogger(__name__)


def load_class_records(
    input_dir: str | Path,
    prefix: str = "Ext.",
    detached_parents: Iterable[str] = ("Ext.Error",),
) -> list[ClassRecord]:
    """Read every class record in *input_dir* whose filename starts with *prefix*.

    Files are read in sorted filename order, which becomes the documentation
    order of classes within a module. I/O errors propagate; a record that is
    not a class export raises SchemaMismatchError.
    """
    input_dir = Path(input_dir)
    detached = set(detached_parents)
    records: list[ClassRecord] = []

    for path in sorted(input_dir.iterdir()):
        if not path.name.startswith(prefix):
            continue
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SchemaMismatchError(path, f"invalid JSON: {e}") from e

        tagname = raw.get("tagname") if isinstance(raw, dict) else None
        if tagname != "class":
            raise SchemaMismatchError(path, f"unknown top level tagname: {tagname!r}")

        try:
            record = ClassRecord.model_validate(raw)
        except ValidationError as e:
            raise SchemaMismatchError(path, f"invalid class record: {e}") from e

        if record.name in detached and record.parent:
            logger.debug("clearing parent %s of %s", record.parent, record.name)
            record = record.model_copy(update={"parent": ""})
        records.append(record)

    logger.info("loaded %d class records from %s", len(records), input_dir)
    return records


class ClassRegistry:
    """Name and member lookup over a fixed set of class records.

    The alias table, the parent graph and the module grouping are computed
    once here; records are never mutated afterwards.
    """

    def __init__(self, classes: Iterable[ClassRecord]) -> None:
        self.classes: tuple[ClassRecord, ...] = tuple(classes)
        self._name_map: dict[str, ClassRecord] = {}
        # class name -> member name -> members in source order
        self._members: dict[str, dict[str, list[MemberRecord]]] = {}
        for cls in self.classes:
            self._name_map[cls.name] = cls
            for alias in cls.aliases:
                self._name_map[alias] = cls
            by_name: dict[str, list[MemberRecord]] = {}
            for member in cls.members:
                by_name.setdefault(member.name, []).append(member)
            self._members[cls.name] = by_name

        self._parents: dict[str, ClassRecord | None] = {}
        self._link_parents()
        self.modules: tuple[Module, ...] = self._group_modules()

    @classmethod
    def from_directory(
        cls, input_dir: str | Path, config: RegistryConfig | None = None
    ) -> ClassRegistry:
        config = config or RegistryConfig()
        return cls(
            load_class_records(
                input_dir,
                prefix=config.class_prefix,
                detached_parents=config.detached_parents,
            )
        )

    def __len__(self) -> int:
        return len(self.classes)

    def __contains__(self, name: object) -> bool:
        return name in self._name_map

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup_class(self, name: str) -> ClassRecord | None:
        return self._name_map.get(name)

    def lookup_member(
        self,
        cls: ClassRecord,
        name: str,
        kinds: Sequence[str] | None = None,
        static: bool | None = None,
    ) -> MemberRecord | None:
        """First member of *cls* called *name*, optionally filtered by kind and side."""
        if self._name_map.get(cls.name) is cls:
            candidates = self._members[cls.name].get(name, [])
        else:
            candidates = [m for m in cls.members if m.name == name]
        for member in candidates:
            if kinds is not None and member.tagname not in kinds:
                continue
            if static is not None and member.static != static:
                continue
            return member
        return None

    def normalize_class_name(self, name: str) -> str | None:
        cls = self.lookup_class(name)
        return cls.name if cls else None

    def parent_of(self, cls: ClassRecord) -> ClassRecord | None:
        return self._parents.get(cls.name)

    def ancestors(self, cls: ClassRecord) -> Iterator[ClassRecord]:
        """Yield the parent chain of *cls*, nearest first."""
        parent = self.parent_of(cls)
        while parent is not None:
            yield parent
            parent = self.parent_of(parent)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _link_parents(self) -> None:
        for cls in self.classes:
            self._parents[cls.name] = self.lookup_class(cls.parent) if cls.parent else None

        for cls in self.classes:
            seen = {cls.name}
            child, parent = cls, self._parents[cls.name]
            while parent is not None:
                if parent.name in seen:
                    logger.warning(
                        "Inheritance cycle at %s; detaching it from %s",
                        child.name,
                        parent.name,
                    )
                    self._parents[child.name] = None
                    break
                seen.add(parent.name)
                child, parent = parent, self._parents.get(parent.name)

    def _group_modules(self) -> tuple[Module, ...]:
        grouped: dict[str, list[ClassRecord]] = {}
        for cls in self.classes:
            grouped.setdefault(cls.module_name, []).append(cls)
        return tuple(
            Module(name=name, classes=tuple(grouped[name])) for name in sorted(grouped)
        )
