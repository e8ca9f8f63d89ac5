"""Data models for type expressions and generics.

Every union below is closed: renderers check each member explicitly and raise
on anything else, so adding a variant means touching every renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

# -----------------------------
# Paths and generic arguments
# -----------------------------


@dataclass(frozen=True)
class Path:
    """A resolved path such as `Vec<T>`, referencing an item by id."""

    name: str
    id: str | None = None
    args: GenericArgs | None = None


@dataclass(frozen=True)
class LifetimeArg:
    lifetime: str


@dataclass(frozen=True)
class TypeArg:
    type: Type


@dataclass(frozen=True)
class ConstArg:
    expr: str


@dataclass(frozen=True)
class InferArg:
    pass


GenericArg = Union[LifetimeArg, TypeArg, ConstArg, InferArg]


@dataclass(frozen=True)
class AssocConstraint:
    """`Item = Type` or `Item: Bounds` inside angle brackets."""

    name: str
    args: GenericArgs | None = None
    equality: Type | str | None = None  # a str is a const expression
    bounds: tuple[GenericBound, ...] = ()


@dataclass(frozen=True)
class AngleBracketed:
    args: tuple[GenericArg, ...] = ()
    constraints: tuple[AssocConstraint, ...] = ()


@dataclass(frozen=True)
class Parenthesized:
    """Fn-trait sugar: `Fn(A, B) -> C`."""

    inputs: tuple[Type, ...] = ()
    output: Type | None = None


@dataclass(frozen=True)
class ReturnTypeNotation:
    pass


GenericArgs = Union[AngleBracketed, Parenthesized, ReturnTypeNotation]

# -----------------------------
# Bounds and generic parameters
# -----------------------------


@dataclass(frozen=True)
class TraitBound:
    trait: Path
    generic_params: tuple[GenericParam, ...] = ()
    modifier: str = "none"  # none / maybe / maybe_const


@dataclass(frozen=True)
class OutlivesBound:
    lifetime: str


@dataclass(frozen=True)
class UseBound:
    """Precise capturing: `use<'a, T>`."""

    args: tuple[str, ...] = ()


GenericBound = Union[TraitBound, OutlivesBound, UseBound]


@dataclass(frozen=True)
class LifetimeParam:
    outlives: tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeParam:
    bounds: tuple[GenericBound, ...] = ()
    default: Type | None = None
    synthetic: bool = False  # desugared `impl Trait` argument


@dataclass(frozen=True)
class ConstParam:
    type: Type
    default: str | None = None


GenericParamKind = Union[LifetimeParam, TypeParam, ConstParam]


@dataclass(frozen=True)
class GenericParam:
    name: str
    kind: GenericParamKind


@dataclass(frozen=True)
class BoundPredicate:
    """`T: Bound + Other`."""

    type: Type
    bounds: tuple[GenericBound, ...] = ()
    generic_params: tuple[GenericParam, ...] = ()


@dataclass(frozen=True)
class LifetimePredicate:
    """`'a: 'b + 'c`."""

    lifetime: str
    outlives: tuple[str, ...] = ()


@dataclass(frozen=True)
class EqPredicate:
    """`<T as Trait>::Assoc = Type`."""

    lhs: Type
    rhs: Type | str


WherePredicate = Union[BoundPredicate, LifetimePredicate, EqPredicate]


@dataclass(frozen=True)
class Generics:
    params: tuple[GenericParam, ...] = ()
    where_predicates: tuple[WherePredicate, ...] = ()


# -----------------------------
# Function signatures
# -----------------------------


@dataclass(frozen=True)
class Header:
    is_const: bool = False
    is_unsafe: bool = False
    is_async: bool = False
    abi: str = "Rust"


@dataclass(frozen=True)
class FnSig:
    inputs: tuple[tuple[str, Type], ...] = ()
    output: Type | None = None
    c_variadic: bool = False


# -----------------------------
# Types
# -----------------------------


@dataclass(frozen=True)
class ResolvedPath:
    path: Path


@dataclass(frozen=True)
class PolyTrait:
    trait: Path
    generic_params: tuple[GenericParam, ...] = ()


@dataclass(frozen=True)
class DynTrait:
    traits: tuple[PolyTrait, ...] = ()
    lifetime: str | None = None


@dataclass(frozen=True)
class GenericType:
    name: str


@dataclass(frozen=True)
class PrimitiveType:
    name: str


@dataclass(frozen=True)
class FunctionPointer:
    sig: FnSig
    generic_params: tuple[GenericParam, ...] = ()
    header: Header = field(default_factory=Header)


@dataclass(frozen=True)
class TupleType:
    elements: tuple[Type, ...] = ()


@dataclass(frozen=True)
class SliceType:
    element: Type


@dataclass(frozen=True)
class ArrayType:
    element: Type
    length: str


@dataclass(frozen=True)
class PatternType:
    """Pattern types are unstable and never rendered."""

    element: Type


@dataclass(frozen=True)
class ImplTrait:
    bounds: tuple[GenericBound, ...] = ()


@dataclass(frozen=True)
class InferType:
    pass


@dataclass(frozen=True)
class RawPointer:
    mutable: bool
    pointee: Type


@dataclass(frozen=True)
class BorrowedRef:
    mutable: bool
    pointee: Type
    lifetime: str | None = None


@dataclass(frozen=True)
class QualifiedPath:
    """`<Self as Trait>::Name` or `Self::Name`."""

    name: str
    self_type: Type
    trait: Path | None = None
    args: GenericArgs | None = None


Type = Union[
    ResolvedPath,
    DynTrait,
    GenericType,
    PrimitiveType,
    FunctionPointer,
    TupleType,
    SliceType,
    ArrayType,
    PatternType,
    ImplTrait,
    InferType,
    RawPointer,
    BorrowedRef,
    QualifiedPath,
]
