"""Logic for decoding rustdoc JSON type expressions into the type model.

rustdoc has renamed a number of fields across format versions; both spellings
are accepted wherever a rename happened.
"""

from typing import Any

from rustman.errors import IndexFormatError
from rustman.type_model import (
    AngleBracketed,
    ArrayType,
    AssocConstraint,
    BorrowedRef,
    BoundPredicate,
    ConstArg,
    ConstParam,
    DynTrait,
    EqPredicate,
    FnSig,
    FunctionPointer,
    GenericArg,
    GenericArgs,
    GenericBound,
    GenericParam,
    Generics,
    GenericType,
    Header,
    ImplTrait,
    InferArg,
    InferType,
    LifetimeArg,
    LifetimeParam,
    LifetimePredicate,
    OutlivesBound,
    Parenthesized,
    Path,
    PatternType,
    PolyTrait,
    PrimitiveType,
    QualifiedPath,
    RawPointer,
    ResolvedPath,
    ReturnTypeNotation,
    SliceType,
    TraitBound,
    TupleType,
    Type,
    TypeArg,
    TypeParam,
    UseBound,
    WherePredicate,
)


def field(raw: dict[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first of `names` present in `raw`."""
    for name in names:
        if name in raw:
            return raw[name]
    return default


def tagged(raw: Any, what: str) -> tuple[str, Any]:
    """Split an externally tagged enum value into (tag, payload)."""
    if isinstance(raw, str):
        return raw, None
    if isinstance(raw, dict) and len(raw) == 1:
        ((tag, payload),) = raw.items()
        return tag, payload
    msg = f"malformed {what}: {raw!r}"
    raise IndexFormatError(msg)


def decode_id(raw: Any) -> str | None:
    """Normalize an item id; ids are strings in old formats, integers in new ones."""
    if raw is None:
        return None
    return str(raw)


def decode_path(raw: dict[str, Any]) -> Path:
    """Decode a resolved path."""
    args = raw.get("args")
    return Path(
        name=str(field(raw, "path", "name", default="")),
        id=decode_id(raw.get("id")),
        args=decode_generic_args(args) if args is not None else None,
    )


def decode_type(raw: Any) -> Type:
    """Decode a type expression."""
    tag, p = tagged(raw, "type")
    if tag == "resolved_path":
        return ResolvedPath(decode_path(p))
    if tag == "dyn_trait":
        return DynTrait(
            traits=tuple(
                PolyTrait(
                    trait=decode_path(t["trait"]),
                    generic_params=decode_params(t.get("generic_params")),
                )
                for t in p.get("traits") or []
            ),
            lifetime=p.get("lifetime"),
        )
    if tag == "generic":
        return GenericType(str(p))
    if tag == "primitive":
        return PrimitiveType(str(p))
    if tag == "function_pointer":
        return FunctionPointer(
            sig=decode_sig(field(p, "sig", "decl", default={})),
            generic_params=decode_params(p.get("generic_params")),
            header=decode_header(p.get("header") or {}),
        )
    if tag == "tuple":
        return TupleType(tuple(decode_type(t) for t in p or []))
    if tag == "slice":
        return SliceType(decode_type(p))
    if tag == "array":
        return ArrayType(decode_type(p["type"]), str(p.get("len", "_")))
    if tag == "pat":
        return PatternType(decode_type(p["type"]))
    if tag == "impl_trait":
        return ImplTrait(decode_bounds(p))
    if tag == "infer":
        return InferType()
    if tag == "raw_pointer":
        return RawPointer(
            mutable=bool(field(p, "is_mutable", "mutable", default=False)),
            pointee=decode_type(p["type"]),
        )
    if tag == "borrowed_ref":
        return BorrowedRef(
            mutable=bool(field(p, "is_mutable", "mutable", default=False)),
            pointee=decode_type(p["type"]),
            lifetime=p.get("lifetime"),
        )
    if tag == "qualified_path":
        trait = p.get("trait")
        args = p.get("args")
        return QualifiedPath(
            name=str(p["name"]),
            self_type=decode_type(p["self_type"]),
            trait=decode_path(trait) if trait else None,
            args=decode_generic_args(args) if args is not None else None,
        )
    msg = f"unknown type variant: {tag}"
    raise IndexFormatError(msg)


def decode_optional_type(raw: Any) -> Type | None:
    """Decode a type that may be null."""
    return None if raw is None else decode_type(raw)


def decode_generic_args(raw: Any) -> GenericArgs:
    """Decode angle-bracketed or parenthesized generic arguments."""
    tag, p = tagged(raw, "generic args")
    if tag == "angle_bracketed":
        return AngleBracketed(
            args=tuple(decode_generic_arg(a) for a in p.get("args") or []),
            constraints=tuple(
                decode_constraint(c)
                for c in field(p, "constraints", "bindings", default=None) or []
            ),
        )
    if tag == "parenthesized":
        return Parenthesized(
            inputs=tuple(decode_type(t) for t in p.get("inputs") or []),
            output=decode_optional_type(p.get("output")),
        )
    if tag == "return_type_notation":
        return ReturnTypeNotation()
    msg = f"unknown generic args: {tag}"
    raise IndexFormatError(msg)


def decode_generic_arg(raw: Any) -> GenericArg:
    """Decode a single generic argument."""
    tag, p = tagged(raw, "generic arg")
    if tag == "lifetime":
        return LifetimeArg(str(p))
    if tag == "type":
        return TypeArg(decode_type(p))
    if tag == "const":
        return ConstArg(str(p.get("expr") or p.get("value") or "_"))
    if tag == "infer":
        return InferArg()
    msg = f"unknown generic arg: {tag}"
    raise IndexFormatError(msg)


def decode_constraint(raw: dict[str, Any]) -> AssocConstraint:
    """Decode an associated item constraint (formerly a type binding)."""
    args = raw.get("args")
    tag, p = tagged(raw["binding"], "constraint")
    equality: Type | str | None = None
    bounds: tuple[GenericBound, ...] = ()
    if tag == "equality":
        term_tag, term = tagged(p, "term")
        equality = decode_type(term) if term_tag == "type" else str(term.get("expr"))
    else:
        bounds = decode_bounds(p)
    return AssocConstraint(
        name=str(raw["name"]),
        args=decode_generic_args(args) if args is not None else None,
        equality=equality,
        bounds=bounds,
    )


def decode_bound(raw: Any) -> GenericBound:
    """Decode a trait, outlives, or precise-capturing bound."""
    tag, p = tagged(raw, "generic bound")
    if tag == "trait_bound":
        return TraitBound(
            trait=decode_path(p["trait"]),
            generic_params=decode_params(p.get("generic_params")),
            modifier=str(p.get("modifier") or "none"),
        )
    if tag == "outlives":
        return OutlivesBound(str(p))
    if tag == "use":
        names = []
        for arg in p or []:
            if isinstance(arg, dict):
                _, name = tagged(arg, "precise capturing arg")
                names.append(str(name))
            else:
                names.append(str(arg))
        return UseBound(tuple(names))
    msg = f"unknown generic bound: {tag}"
    raise IndexFormatError(msg)


def decode_bounds(raw: Any) -> tuple[GenericBound, ...]:
    """Decode a list of bounds."""
    return tuple(decode_bound(b) for b in raw or [])


def decode_param(raw: dict[str, Any]) -> GenericParam:
    """Decode a generic parameter definition."""
    tag, p = tagged(raw["kind"], "generic param")
    if tag == "lifetime":
        kind: Any = LifetimeParam(tuple(p.get("outlives") or []))
    elif tag == "type":
        kind = TypeParam(
            bounds=decode_bounds(p.get("bounds")),
            default=decode_optional_type(p.get("default")),
            synthetic=bool(field(p, "is_synthetic", "synthetic", default=False)),
        )
    elif tag == "const":
        default = p.get("default")
        kind = ConstParam(
            type=decode_type(p["type"]),
            default=None if default is None else str(default),
        )
    else:
        msg = f"unknown generic param kind: {tag}"
        raise IndexFormatError(msg)
    return GenericParam(name=str(raw["name"]), kind=kind)


def decode_params(raw: Any) -> tuple[GenericParam, ...]:
    """Decode a list of generic parameter definitions."""
    return tuple(decode_param(p) for p in raw or [])


def decode_where(raw: Any) -> WherePredicate:
    """Decode a where-clause predicate."""
    tag, p = tagged(raw, "where predicate")
    if tag == "bound_predicate":
        return BoundPredicate(
            type=decode_type(p["type"]),
            bounds=decode_bounds(p.get("bounds")),
            generic_params=decode_params(p.get("generic_params")),
        )
    if tag == "lifetime_predicate":
        return LifetimePredicate(str(p["lifetime"]), tuple(p.get("outlives") or []))
    if tag == "region_predicate":
        outlives = [
            b.lifetime
            for b in decode_bounds(p.get("bounds"))
            if isinstance(b, OutlivesBound)
        ]
        return LifetimePredicate(str(p["lifetime"]), tuple(outlives))
    if tag == "eq_predicate":
        term_tag, term = tagged(p["rhs"], "term")
        rhs = decode_type(term) if term_tag == "type" else str(term.get("expr"))
        return EqPredicate(lhs=decode_type(p["lhs"]), rhs=rhs)
    msg = f"unknown where predicate: {tag}"
    raise IndexFormatError(msg)


def decode_generics(raw: dict[str, Any] | None) -> Generics:
    """Decode generic parameters and where predicates."""
    if not raw:
        return Generics()
    return Generics(
        params=decode_params(raw.get("params")),
        where_predicates=tuple(
            decode_where(w) for w in raw.get("where_predicates") or []
        ),
    )


def decode_abi(raw: Any) -> str:
    """Decode an ABI into its source spelling, e.g. `C-unwind`."""
    if raw is None:
        return "Rust"
    tag, p = tagged(raw, "abi")
    if tag == "Other":
        return str(p).strip('"')
    if tag == "Rust":
        return "Rust"
    name = tag if tag == "C" else tag.lower()
    if isinstance(p, dict) and p.get("unwind"):
        name += "-unwind"
    return name


def decode_header(raw: dict[str, Any]) -> Header:
    """Decode a function header (qualifiers and ABI)."""
    return Header(
        is_const=bool(field(raw, "is_const", "const", default=False)),
        is_unsafe=bool(field(raw, "is_unsafe", "unsafe", default=False)),
        is_async=bool(field(raw, "is_async", "async", default=False)),
        abi=decode_abi(raw.get("abi")),
    )


def decode_sig(raw: dict[str, Any]) -> FnSig:
    """Decode a function signature."""
    return FnSig(
        inputs=tuple(
            (str(name), decode_type(ty)) for name, ty in raw.get("inputs") or []
        ),
        output=decode_optional_type(raw.get("output")),
        c_variadic=bool(field(raw, "is_c_variadic", "c_variadic", default=False)),
    )
