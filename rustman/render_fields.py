"""Logic for rendering struct, union and enum variant field layouts."""

from rustman.inline import Inline, bold, line_break, pad, roman
from rustman.item_model import (
    Enum,
    FieldLayout,
    PlainFields,
    StructField,
    TupleFields,
    UnitFields,
    Variant,
)
from rustman.markdown_converter import to_runs
from rustman.symbol_index import SymbolIndex
from rustman.type_model import Type
from rustman.type_renderer import render_sequence, render_type

PRIVATE_FIELDS = "/* private fields */"
HIDDEN_FIELD = "/* hidden */"
HIDDEN_FIELDS = "/* hidden fields */"
HIDDEN_VARIANTS = "/* hidden variants */"


def render_fields(
    index: SymbolIndex,
    layout: FieldLayout,
    depth: int,
    buf: list[Inline],
    *,
    in_variant: bool = False,
    stripped_placeholder: str = PRIVATE_FIELDS,
) -> None:
    """Render the fields of a struct, union or variant declared at `depth`.

    Struct tuple fields that are hidden collapse into one trailing
    placeholder; inside a variant each one is marked where it stands.
    """
    if isinstance(layout, UnitFields):
        return
    if isinstance(layout, TupleFields):
        _render_tuple_fields(index, layout, depth, buf, in_variant)
    elif isinstance(layout, PlainFields):
        _render_plain_fields(index, layout, depth, buf, stripped_placeholder)
    else:
        msg = f"unhandled field layout: {type(layout).__name__}"
        raise TypeError(msg)


def _render_tuple_fields(
    index: SymbolIndex,
    layout: TupleFields,
    depth: int,
    buf: list[Inline],
    in_variant: bool,
) -> None:
    elements: list[Type | None] = []
    for field_id in layout.fields:
        if field_id is None:
            if in_variant:
                elements.append(None)
            continue
        _, field = index.lookup_kind(field_id, StructField)
        elements.append(field.type)
    if not in_variant and any(f is None for f in layout.fields):
        elements.append(None)

    placeholder = HIDDEN_FIELD if in_variant else PRIVATE_FIELDS

    def one(ty: Type | None, d: int) -> None:
        if ty is None:
            buf.append(roman(placeholder))
        else:
            render_type(index, ty, d, buf)

    # Every declared field counts toward wrapping, hidden or not.
    render_sequence(
        buf, "(", ")", elements, depth, one, wrap_count=len(layout.fields)
    )


def _render_plain_fields(
    index: SymbolIndex,
    layout: PlainFields,
    depth: int,
    buf: list[Inline],
    stripped_placeholder: str,
) -> None:
    if not layout.fields and not layout.stripped:
        buf.append(roman(" {}"))
        return

    inner = depth + 1
    buf.append(roman(" {"))
    for i, field_id in enumerate(layout.fields):
        if i:
            buf.append(roman(","))
        buf.append(line_break())
        item, field = index.lookup_kind(field_id, StructField)
        if item.docs:
            if i:
                buf.append(line_break())
            buf.append(roman(pad(inner)))
            buf += to_runs(item.docs, inner)
        buf.append(roman(f"{pad(inner)}{item.name}: "))
        render_type(index, field.type, inner, buf)

    if layout.stripped:
        if layout.fields:
            buf.append(roman(","))
        buf += [line_break(), roman(pad(inner) + stripped_placeholder)]

    buf += [line_break(), roman(pad(depth) + "}")]


def render_variants(index: SymbolIndex, enum: Enum, buf: list[Inline]) -> None:
    """Render the brace-delimited variant list of an enum, a blank line apart."""
    if not enum.variants and not enum.variants_stripped:
        buf.append(roman(" {}"))
        return

    buf.append(roman(" {"))
    for i, variant_id in enumerate(enum.variants):
        if i:
            buf += [roman(","), line_break()]
        buf.append(line_break())
        item, variant = index.lookup_kind(variant_id, Variant)
        if item.docs:
            buf.append(roman(pad(1)))
            buf += to_runs(item.docs, 1)
        buf += [roman(pad(1)), bold(item.name or "")]
        render_fields(
            index,
            variant.kind,
            1,
            buf,
            in_variant=True,
            stripped_placeholder=HIDDEN_FIELDS,
        )
        if variant.discriminant is not None:
            buf.append(roman(f" = {variant.discriminant}"))

    if enum.variants_stripped:
        if enum.variants:
            buf += [roman(","), line_break()]
        buf += [line_break(), roman(pad(1) + HIDDEN_VARIANTS)]

    buf += [line_break(), roman("}")]
