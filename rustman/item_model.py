"""Data models for documented items and their kind-specific payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from rustman.type_model import FnSig, GenericBound, Generics, Header, Path, Type


@dataclass(frozen=True)
class Deprecation:
    since: str | None = None
    note: str | None = None


# -----------------------------
# Field layouts (structs and variants)
# -----------------------------


@dataclass(frozen=True)
class UnitFields:
    pass


@dataclass(frozen=True)
class TupleFields:
    fields: tuple[str | None, ...] = ()  # None marks a hidden field


@dataclass(frozen=True)
class PlainFields:
    fields: tuple[str, ...] = ()
    stripped: bool = False


FieldLayout = Union[UnitFields, TupleFields, PlainFields]

# -----------------------------
# Payloads
# -----------------------------


@dataclass(frozen=True)
class Module:
    items: tuple[str, ...] = ()
    is_crate: bool = False


@dataclass(frozen=True)
class Struct:
    kind: FieldLayout
    generics: Generics = field(default_factory=Generics)
    impls: tuple[str, ...] = ()


@dataclass(frozen=True)
class StructField:
    type: Type


@dataclass(frozen=True)
class Enum:
    generics: Generics = field(default_factory=Generics)
    variants: tuple[str, ...] = ()
    variants_stripped: bool = False
    impls: tuple[str, ...] = ()


@dataclass(frozen=True)
class Variant:
    kind: FieldLayout
    discriminant: str | None = None


@dataclass(frozen=True)
class Union_:
    generics: Generics = field(default_factory=Generics)
    fields: tuple[str, ...] = ()
    fields_stripped: bool = False
    impls: tuple[str, ...] = ()


@dataclass(frozen=True)
class Trait:
    is_auto: bool = False
    is_unsafe: bool = False
    is_object_safe: bool = True
    items: tuple[str, ...] = ()
    generics: Generics = field(default_factory=Generics)
    bounds: tuple[GenericBound, ...] = ()
    implementations: tuple[str, ...] = ()


@dataclass(frozen=True)
class TraitAlias:
    generics: Generics = field(default_factory=Generics)
    bounds: tuple[GenericBound, ...] = ()


@dataclass(frozen=True)
class Function:
    sig: FnSig = field(default_factory=FnSig)
    generics: Generics = field(default_factory=Generics)
    header: Header = field(default_factory=Header)
    has_body: bool = True


@dataclass(frozen=True)
class TypeAlias:
    type: Type
    generics: Generics = field(default_factory=Generics)


@dataclass(frozen=True)
class Constant:
    type: Type
    expr: str | None = None


@dataclass(frozen=True)
class Static:
    type: Type
    mutable: bool = False
    expr: str | None = None


@dataclass(frozen=True)
class Macro:
    source: str = ""


@dataclass(frozen=True)
class ProcMacro:
    kind: str = "bang"  # bang / attr / derive
    helpers: tuple[str, ...] = ()


@dataclass(frozen=True)
class Primitive:
    name: str
    impls: tuple[str, ...] = ()


@dataclass(frozen=True)
class Impl:
    for_: Type
    generics: Generics = field(default_factory=Generics)
    trait: Path | None = None
    items: tuple[str, ...] = ()
    is_unsafe: bool = False
    negative: bool = False
    synthetic: bool = False
    blanket_impl: Type | None = None


@dataclass(frozen=True)
class AssocConst:
    type: Type
    value: str | None = None


@dataclass(frozen=True)
class AssocType:
    generics: Generics = field(default_factory=Generics)
    bounds: tuple[GenericBound, ...] = ()
    type: Type | None = None


@dataclass(frozen=True)
class Use:
    source: str
    name: str
    id: str | None = None
    is_glob: bool = False


@dataclass(frozen=True)
class ExternCrate:
    name: str


@dataclass(frozen=True)
class ExternType:
    pass


ItemKind = Union[
    Module,
    Struct,
    StructField,
    Enum,
    Variant,
    Union_,
    Trait,
    TraitAlias,
    Function,
    TypeAlias,
    Constant,
    Static,
    Macro,
    ProcMacro,
    Primitive,
    Impl,
    AssocConst,
    AssocType,
    Use,
    ExternCrate,
    ExternType,
]


@dataclass(frozen=True)
class Item:
    """A documented declaration."""

    id: str
    inner: ItemKind
    name: str | None = None
    docs: str | None = None
    attrs: tuple[str, ...] = ()
    deprecation: Deprecation | None = None
    links: tuple[tuple[str, str], ...] = ()  # (link text, target id)
