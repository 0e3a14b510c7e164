'''
Reference sinks, materialize any table source into a concrete layout.

'''
from __future__ import annotations

from typing import Any, Iterator

import msgspec
import polars as pl

from native_tables.capability import declaration_for
from native_tables.fallback import each_column, to_columns
from native_tables.interface import columns, rows
from native_tables.schema import check_schema
from native_tables.views import ColumnView, RowView


def rowtable(source: Any) -> list[msgspec.Struct]:
    '''
    List of row structs (`Schema.row_struct`), one per source row.

    '''
    view = rows(source)
    sch = view.schema
    struct = sch.row_struct

    out = []
    values: list[Any] = [None] * len(sch)

    def _set(value: Any, i: int, name: str) -> None:
        values[i] = value

    for row in view:
        each_column(sch, row, _set)
        out.append(struct(*values))

    return out


def columntable(source: Any) -> dict[str, list[Any]]:
    '''
    Plain `name -> list` copy of the source columns.

    '''
    view = columns(source)
    view.check_lengths()
    return {name: list(view.get_column(name)) for name in view.column_names()}


def to_frame(source: Any) -> pl.DataFrame:
    '''
    Materialize a source as a `pl.DataFrame`, typed by its schema when the
    types are known.

    '''
    if isinstance(source, pl.DataFrame):
        return source

    view = columns(source)
    view.check_lengths()
    sch = view.schema
    data = {name: view.get_column(name) for name in sch.names}
    return pl.DataFrame(
        data,
        schema=sch.as_polars() if sch.known_types else None,
    )


def rowcount(source: Any) -> int:
    '''
    Number of rows, cheap for sized sources and column views, counts by
    iterating otherwise.

    '''
    if isinstance(source, ColumnView):
        return source.check_lengths()

    view = rows(source)
    if view.nrows is not None:
        return view.nrows

    return sum(1 for _ in view)


def partitions(source: Any) -> Iterator[Any]:
    '''
    Iterate the sub-tables of a partitioned source, each one a table source
    on its own. Sources without a `partitions` declaration are a single
    partition.

    '''
    decl = declaration_for(type(source))
    if decl is not None and decl.partitions is not None:
        yield from decl.partitions(source)
        return

    yield source


def concat_rows(sources: Any) -> RowView:
    '''
    Single row view over several sources sharing a schema, e.g. the
    partitions of one table.

    '''
    parts = [rows(p) for p in sources]
    if not parts:
        return RowView(())

    # empty partitions carry no names
    sch = next((p.schema for p in parts if p.schema.names), parts[0].schema)
    for part in parts:
        if part.schema.names:
            check_schema(part.schema, sch)

    return RowView((row for part in parts for row in part), schema=sch)


def concat_columns(sources: Any) -> ColumnView:
    '''
    Buffer several row sources sharing a schema into one column view.

    '''
    return to_columns(concat_rows(sources))
