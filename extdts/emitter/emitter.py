"""Declaration emitter: turns a ClassRegistry into TypeScript declaration text."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from extdts.config.models import EmitterConfig
from extdts.emitter.diagnostics import DiagnosticSink
from extdts.emitter.models import ModuleDeclaration, ModuleScope
from extdts.emitter.naming import doc_comment, escape_param_name, quote_property
from extdts.emitter.types import REST_MARKER, UNKNOWN_TYPE, TypeConverter
from extdts.registry.models import (
    ClassRecord,
    ConfigMember,
    MemberRecord,
    MethodMember,
    Module,
    PropertyMember,
)
from extdts.registry.registry import ClassRegistry

logger = logging.getLogger(__name__)

INHERITABLE_KINDS: tuple[str, ...] = ("property", "method", "cfg")
CONFIG_PARAM = "config"
INDENT = "    "


def _indent(text: str) -> str:
    return "\n".join(INDENT + line if line else line for line in text.splitlines())


class DeclarationEmitter:
    """Emits one TypeScript declaration file for every class in a registry.

    Pipeline:
        registry.modules → ModuleScope per module → classes → members
    """

    def __init__(
        self,
        registry: ClassRegistry,
        config: EmitterConfig | None = None,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or EmitterConfig()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()
        self.types = TypeConverter(registry, self.diagnostics)

    # ------------------------------------------------------------------
    # Emission rules
    # ------------------------------------------------------------------

    def is_member_visible(self, cls: ClassRecord, member: MemberRecord) -> bool:
        # protected means nothing on a static or singleton surface
        if member.protected:
            return not cls.singleton and not member.static
        return not member.private

    def does_parent_emit_member(self, cls: ClassRecord, name: str, static: bool) -> bool:
        """Whether an ancestor of *cls* already declares a visible *name* on that side."""
        for ancestor in self.registry.ancestors(cls):
            member = self.registry.lookup_member(ancestor, name, INHERITABLE_KINDS, static)
            if member is not None and self.is_member_visible(ancestor, member):
                return True
        return False

    def should_emit_member(self, cls: ClassRecord, member: MemberRecord) -> bool:
        is_constructor = isinstance(member, MethodMember) and member.is_constructor
        if cls.singleton and (member.static or is_constructor):
            return False
        if not self.is_member_visible(cls, member):
            return False
        if is_constructor:
            return True
        # Ext sometimes overrides with incompatible types; inherit instead.
        # Singletons get no extends clause, so on them the member is lost.
        return not self.does_parent_emit_member(cls, member.name, member.static)

    def emits_constructor(self, cls: ClassRecord) -> bool:
        constructor = self.registry.lookup_member(cls, "constructor", ("method",))
        return constructor is not None and self.should_emit_member(cls, constructor)

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def config_interface_name(self, cls: ClassRecord) -> str:
        return f"{cls.base_name}Config"

    def qualified_config_interface_name(self, cls: ClassRecord) -> str:
        name = self.config_interface_name(cls)
        return f"{cls.module_name}.{name}" if cls.module_name else name

    def class_doc_url(self, cls: ClassRecord) -> str:
        return self.config.doc_url + cls.name

    def member_doc_url(self, cls: ClassRecord, member: MemberRecord) -> str:
        return f"{self.config.doc_url}{cls.name}-{member.tagname}-{member.name}"

    # ------------------------------------------------------------------
    # Configuration interfaces
    # ------------------------------------------------------------------

    def config_interface_base(self, cls: ClassRecord) -> ClassRecord | None:
        """Nearest ancestor that synthesizes its own configuration interface."""
        if not self.does_parent_emit_member(cls, "constructor", False):
            return None
        for ancestor in self.registry.ancestors(cls):
            if self.emits_constructor(ancestor):
                return ancestor
        return None

    def config_option_names(self, cls: ClassRecord) -> set[str]:
        """Every option declared by the configuration interface of *cls*, inherited ones included."""
        names = {m.name for m in cls.members if isinstance(m, ConfigMember)}
        base = self.config_interface_base(cls)
        if base is not None:
            names |= self.config_option_names(base)
        return names

    def construct_config_interface(self, cls: ClassRecord, scope: ModuleScope) -> str:
        base = self.config_interface_base(cls)
        inherited = self.config_option_names(base) if base is not None else set()

        fields: list[str] = []
        seen: set[str] = set()
        for member in cls.members:
            if not isinstance(member, ConfigMember):
                continue
            if member.name in inherited or member.name in seen:
                continue
            seen.add(member.name)
            optional = "" if member.required else "?"
            cfg_type = self.types.convert(member.type, scope=scope)
            fields.append(f"{quote_property(member.name)}{optional}: {cfg_type};")

        keyword = "export interface" if cls.module_name else "interface"
        extends = f" extends {self.qualified_config_interface_name(base)}" if base else ""
        body = _indent("\n".join(fields))
        if body:
            body += "\n"
        return f"{keyword} {self.config_interface_name(cls)}{extends} {{\n{body}}}\n"

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def emit_member(
        self, cls: ClassRecord, member: MemberRecord, scope: ModuleScope
    ) -> str | None:
        """Declaration text for *member*, or None when it is not emitted."""
        if not self.should_emit_member(cls, member):
            return None
        if isinstance(member, PropertyMember):
            return self._emit_property(cls, member, scope)
        if isinstance(member, MethodMember):
            return self._emit_method(cls, member, scope)
        if isinstance(member, ConfigMember):
            return self._emit_config(cls, member, scope)
        raise TypeError(f"Unsupported member kind: {member.tagname!r}")

    def _prefix(self, cls: ClassRecord, member: MemberRecord) -> str:
        doc = doc_comment(member.short_doc, self.member_doc_url(cls, member))
        static = "static " if cls.singleton or member.static else ""
        return f"{doc}\n{static}"

    def _emit_property(
        self, cls: ClassRecord, member: PropertyMember, scope: ModuleScope
    ) -> str | None:
        if self.registry.lookup_member(cls, member.name, ("method",)):
            self.diagnostics.warn(
                "member-collision",
                f"{cls.name}.{member.name}",
                "omitting property that also exists as a method",
            )
            return None

        config = self.registry.lookup_member(cls, member.name, ("cfg",))
        if not cls.singleton and config is not None:
            prop_type = self.types.convert(f"{config.type}|{member.type}", scope=scope)
        else:
            prop_type = self.types.convert(member.type, scope=scope)

        optional = "?" if member.optional else ""
        return f"{self._prefix(cls, member)}{quote_property(member.name)}{optional}: {prop_type};"

    def _emit_config(
        self, cls: ClassRecord, member: ConfigMember, scope: ModuleScope
    ) -> str | None:
        if self.registry.lookup_member(cls, member.name, ("method",)):
            self.diagnostics.warn(
                "member-collision",
                f"{cls.name}.{member.name}",
                "omitting config that also exists as a method",
            )
            return None
        if self.registry.lookup_member(cls, member.name, ("property",)):
            return None  # the property declaration carries the config type
        if cls.singleton:
            return None

        cfg_type = self.types.convert(member.type, scope=scope)
        return f"{self._prefix(cls, member)}{quote_property(member.name)}: {cfg_type};"

    def _emit_method(
        self, cls: ClassRecord, member: MethodMember, scope: ModuleScope
    ) -> str:
        params = self.build_parameters(cls, member, scope)
        if member.is_constructor:
            returns = ""
        elif member.returns is not None:
            returns = ": " + self.types.convert(
                member.returns.type, member.returns.properties, scope
            )
        else:
            returns = ": void"
        signature = f"{quote_property(member.name)}({', '.join(params)}){returns};"
        return self._prefix(cls, member) + signature

    def build_parameters(
        self, cls: ClassRecord, member: MethodMember, scope: ModuleScope
    ) -> list[str]:
        """Render the parameter list of *member* in declaration order."""
        rendered: list[str] = []
        seen: set[str] = set()
        optional = False
        count = len(member.params)

        for index, param in enumerate(member.params):
            name = escape_param_name(param.name)
            # Ext 5.1.0 documents Ext.app.BaseController.redirectTo's parameter twice
            if name in seen:
                self.diagnostics.warn(
                    "duplicate-param",
                    f"{cls.name}.{member.name}#{name}",
                    "skipping duplicate parameter",
                )
                continue
            seen.add(name)

            # a required parameter cannot follow an optional one
            optional = optional or param.optional

            if param.type.endswith(REST_MARKER):
                if index < count - 1:
                    # nothing may follow a rest parameter; fold the remainder into it
                    rendered.append(f"...{name}: {UNKNOWN_TYPE}[]")
                    break
                element = self.types.convert(
                    param.type[: -len(REST_MARKER)], param.properties, scope
                )
                rendered.append(f"...{name}: {self.types.array_of(element)}")
                break

            if member.is_constructor and param.name == CONFIG_PARAM:
                param_type = self.config_interface_name(cls)
            else:
                param_type = self.types.convert(param.type, param.properties, scope)
            marker = "?" if optional else ""
            rendered.append(f"{name}{marker}: {param_type}")

        return rendered

    # ------------------------------------------------------------------
    # Classes, modules, file
    # ------------------------------------------------------------------

    def emit_class(self, cls: ClassRecord, scope: ModuleScope) -> str:
        interface = ""
        if self.emits_constructor(cls):
            interface = self.construct_config_interface(cls, scope)

        parent = self.registry.parent_of(cls)
        if cls.parent and self.registry.lookup_class(cls.parent) is None:
            self.diagnostics.warn(
                "unresolved-parent",
                cls.name,
                f"unable to find parent class, so omitting extends clause: {cls.parent}",
            )
        extends = f" extends {parent.name}" if parent is not None and not cls.singleton else ""
        keyword = "export class" if cls.module_name else "declare class"

        declarations: list[str] = []
        emitted: set[tuple[str, bool]] = set()
        for member in cls.members:
            text = self.emit_member(cls, member, scope)
            if text is None:
                continue
            key = (member.name, member.static or cls.singleton)
            if key in emitted:
                self.diagnostics.warn(
                    "duplicate-member",
                    f"{cls.name}.{member.name}",
                    f"skipping duplicate {member.tagname} declaration",
                )
                continue
            emitted.add(key)
            declarations.append(_indent(text))

        body = "\n".join(declarations)
        if body:
            body += "\n"
        doc = doc_comment(cls.short_doc, self.class_doc_url(cls))
        return f"{interface}{doc}\n{keyword} {cls.base_name}{extends} {{\n{body}}}"

    def emit_module(self, module: Module) -> ModuleDeclaration:
        # every base name must be known before the first class is emitted
        scope = ModuleScope.for_module(module, self.config.alias_prefix)
        classes = "\n".join(self.emit_class(cls, scope) for cls in module.classes)
        if module.name:
            text = f"declare namespace {module.name} {{\n{classes}\n}}"
        else:
            text = classes
        return ModuleDeclaration(
            name=module.name, text=text, builtin_aliases=dict(scope.aliases)
        )

    def emit(self, generated_at: datetime | None = None) -> str:
        """Emit the complete declaration file."""
        generated_at = generated_at or datetime.now(timezone.utc)
        declarations = [self.emit_module(module) for module in self.registry.modules]

        aliases: dict[str, str] = {}
        for declaration in declarations:
            for target, alias in declaration.builtin_aliases.items():
                aliases.setdefault(alias, target)

        lines = [
            f"// Ext type declarations (Typescript 1.4 or newer) generated on {generated_at.isoformat()}",
            f"// For more information, see: {self.config.project_url}",
        ]
        lines.extend(f"type {alias} = {target};" for alias, target in sorted(aliases.items()))
        lines.extend(d.text for d in declarations)
        logger.info(
            "emitted %d modules, %d classes (%d diagnostics)",
            len(declarations),
            len(self.registry),
            len(self.diagnostics),
        )
        return "\n".join(lines) + "\n"
