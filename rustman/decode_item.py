"""Logic for decoding rustdoc JSON items into the item model."""

from typing import Any

from rustman.decode_types import (
    decode_bounds,
    decode_generics,
    decode_header,
    decode_id,
    decode_optional_type,
    decode_path,
    decode_sig,
    decode_type,
    field,
    tagged,
)
from rustman.errors import IndexFormatError
from rustman.item_model import (
    AssocConst,
    AssocType,
    Constant,
    Deprecation,
    Enum,
    ExternCrate,
    ExternType,
    FieldLayout,
    Function,
    Impl,
    Item,
    ItemKind,
    Macro,
    Module,
    PlainFields,
    Primitive,
    ProcMacro,
    Static,
    Struct,
    StructField,
    Trait,
    TraitAlias,
    TupleFields,
    TypeAlias,
    Union_,
    UnitFields,
    Use,
    Variant,
)


def _ids(raw: Any) -> tuple[str, ...]:
    return tuple(str(i) for i in raw or [])


def _flag(raw: dict[str, Any], *names: str) -> bool:
    return bool(field(raw, *names, default=False))


def decode_layout(raw: Any) -> FieldLayout:
    """Decode a struct kind or variant kind."""
    tag, p = tagged(raw, "field layout")
    if tag in ("unit", "plain") and p is None:
        return UnitFields()
    if tag == "tuple":
        return TupleFields(tuple(decode_id(f) for f in p or []))
    if tag in ("plain", "struct"):
        return PlainFields(
            fields=_ids(p.get("fields")),
            stripped=_flag(p, "has_stripped_fields", "fields_stripped"),
        )
    msg = f"unknown field layout: {tag}"
    raise IndexFormatError(msg)


def _decode_struct(p: dict[str, Any]) -> Struct:
    if "struct_type" in p:
        # Pre-0.20 layout: a struct_type tag next to a flat field list.
        style = p["struct_type"]
        if style == "unit":
            kind: FieldLayout = UnitFields()
        elif style == "tuple":
            kind = TupleFields(tuple(decode_id(f) for f in p.get("fields") or []))
        else:
            kind = PlainFields(
                _ids(p.get("fields")), _flag(p, "fields_stripped")
            )
    else:
        kind = decode_layout(p["kind"])
    return Struct(
        kind=kind,
        generics=decode_generics(p.get("generics")),
        impls=_ids(p.get("impls")),
    )


def _decode_variant(p: Any) -> Variant:
    disc = p.get("discriminant")
    return Variant(
        kind=decode_layout(p["kind"]),
        discriminant=str(disc.get("expr")) if disc else None,
    )


def _decode_const_expr(p: dict[str, Any]) -> str | None:
    const = p.get("const")
    if isinstance(const, dict):
        return const.get("expr")
    return p.get("expr")


def _decode_impl(p: dict[str, Any]) -> Impl:
    trait = p.get("trait")
    return Impl(
        for_=decode_type(p["for"]),
        generics=decode_generics(p.get("generics")),
        trait=decode_path(trait) if trait else None,
        items=_ids(p.get("items")),
        is_unsafe=bool(p.get("is_unsafe", False)),
        negative=_flag(p, "is_negative", "negative"),
        synthetic=_flag(p, "is_synthetic", "synthetic"),
        blanket_impl=decode_optional_type(p.get("blanket_impl")),
    )


def decode_kind(tag: str, p: Any) -> ItemKind:
    """Decode an item payload given its kind tag."""
    if tag == "module":
        return Module(items=_ids(p.get("items")), is_crate=bool(p.get("is_crate")))
    if tag == "struct":
        return _decode_struct(p)
    if tag == "struct_field":
        return StructField(decode_type(p))
    if tag == "enum":
        return Enum(
            generics=decode_generics(p.get("generics")),
            variants=_ids(p.get("variants")),
            variants_stripped=_flag(
                p, "has_stripped_variants", "variants_stripped"
            ),
            impls=_ids(p.get("impls")),
        )
    if tag == "variant":
        return _decode_variant(p)
    if tag == "union":
        return Union_(
            generics=decode_generics(p.get("generics")),
            fields=_ids(p.get("fields")),
            fields_stripped=_flag(p, "has_stripped_fields", "fields_stripped"),
            impls=_ids(p.get("impls")),
        )
    if tag == "trait":
        return Trait(
            is_auto=bool(p.get("is_auto", False)),
            is_unsafe=bool(p.get("is_unsafe", False)),
            is_object_safe=bool(
                field(p, "is_dyn_compatible", "is_object_safe", default=True)
            ),
            items=_ids(p.get("items")),
            generics=decode_generics(p.get("generics")),
            bounds=decode_bounds(p.get("bounds")),
            implementations=_ids(p.get("implementations")),
        )
    if tag == "trait_alias":
        return TraitAlias(
            generics=decode_generics(p.get("generics")),
            bounds=decode_bounds(field(p, "params", "bounds", default=None)),
        )
    if tag in ("function", "method"):
        return Function(
            sig=decode_sig(field(p, "sig", "decl", default={})),
            generics=decode_generics(p.get("generics")),
            header=decode_header(p.get("header") or {}),
            has_body=bool(p.get("has_body", True)),
        )
    if tag in ("type_alias", "typedef"):
        return TypeAlias(
            type=decode_type(p["type"]),
            generics=decode_generics(p.get("generics")),
        )
    if tag == "constant":
        return Constant(type=decode_type(p["type"]), expr=_decode_const_expr(p))
    if tag == "static":
        return Static(
            type=decode_type(p["type"]),
            mutable=_flag(p, "is_mutable", "mutable"),
            expr=p.get("expr"),
        )
    if tag == "macro":
        return Macro(str(p or ""))
    if tag == "proc_macro":
        return ProcMacro(
            kind=str(p.get("kind") or "bang"),
            helpers=tuple(p.get("helpers") or []),
        )
    if tag == "primitive":
        return Primitive(name=str(p["name"]), impls=_ids(p.get("impls")))
    if tag == "impl":
        return _decode_impl(p)
    if tag == "assoc_const":
        return AssocConst(
            type=decode_type(p["type"]),
            value=field(p, "value", "default", default=None),
        )
    if tag == "assoc_type":
        return AssocType(
            generics=decode_generics(p.get("generics")),
            bounds=decode_bounds(p.get("bounds")),
            type=decode_optional_type(field(p, "type", "default", default=None)),
        )
    if tag in ("use", "import"):
        return Use(
            source=str(p.get("source", "")),
            name=str(p.get("name", "")),
            id=decode_id(p.get("id")),
            is_glob=_flag(p, "is_glob", "glob"),
        )
    if tag == "extern_crate":
        return ExternCrate(str(p.get("name", "")))
    if tag in ("extern_type", "foreign_type"):
        return ExternType()
    msg = f"unknown item kind: {tag}"
    raise IndexFormatError(msg)


def _repr_attr(p: dict[str, Any]) -> str:
    parts = []
    kind = p.get("kind")
    if kind and kind != "rust":
        parts.append("C" if kind == "c" else str(kind))
    if p.get("int"):
        parts.append(str(p["int"]))
    if p.get("align") is not None:
        parts.append(f"align({p['align']})")
    if p.get("packed") is not None:
        parts.append(f"packed({p['packed']})")
    return f"#[repr({', '.join(parts)})]"


def decode_attr(raw: Any) -> str:
    """Decode an attribute into its source spelling.

    Older formats store attributes as source strings; newer ones use tagged
    objects, with unit attributes such as `non_exhaustive` as bare names.
    """
    if isinstance(raw, str):
        return raw if raw.startswith("#") else f"#[{raw}]"
    tag, p = tagged(raw, "attribute")
    if tag == "other":
        return str(p)
    if tag == "repr":
        return _repr_attr(p or {})
    return f"#[{tag}]"


def decode_item(raw: dict[str, Any]) -> Item:
    """Decode one entry of the rustdoc index."""
    if "kind" in raw and isinstance(raw.get("kind"), str):
        # Formats before v20 kept the tag next to an untagged payload.
        tag, payload = raw["kind"], raw.get("inner")
    else:
        tag, payload = tagged(raw.get("inner"), "item")

    dep = raw.get("deprecation")
    links = raw.get("links") or {}
    return Item(
        id=str(raw["id"]),
        inner=decode_kind(tag, payload),
        name=raw.get("name"),
        docs=raw.get("docs"),
        attrs=tuple(decode_attr(a) for a in raw.get("attrs") or []),
        deprecation=Deprecation(dep.get("since"), dep.get("note")) if dep else None,
        links=tuple((str(text), str(target)) for text, target in links.items()),
    )
