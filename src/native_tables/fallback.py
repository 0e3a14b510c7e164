from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

import polars as pl

from native_tables.access import get_column
from native_tables.errors import MalformedSource
from native_tables.schema import Schema
from native_tables.views import ColumnsRows, ColumnView, RowView


log = logging.getLogger(__name__)


ColumnCallback = Callable[[Any, int, str], Any]


def each_column(schema: Schema, row: Any, callback: ColumnCallback) -> None:
    '''
    Call `callback(value, index, name)` once per schema column, in schema
    order, whatever order `row` keeps its own fields in.

    '''
    for i, name in enumerate(schema.names):
        callback(get_column(row, name), i, name)


class ColumnBuilder:
    '''
    Lightweight column store, turns rows into columns.

    - append/extend accumulate python values, one list per schema column.
    - flush() hands the buffers out as a `ColumnView` and starts over,
      flush_frame() does the same but materializes a `pl.DataFrame`.

    A row missing a schema field raises `MalformedSource` and drops every
    value buffered since the last flush, a partially filled set of columns is
    never handed out.

    '''

    def __init__(self, schema: Schema) -> None:
        self._schema = schema
        self._names = schema.names

        # one python list per column (schema order)
        self._col_lists: list[list[Any]] = [[] for _ in self._names]
        self._nrows = 0

    @property
    def schema(self) -> Schema:
        return self._schema

    def _push(self, value: Any, i: int, name: str) -> None:
        self._col_lists[i].append(value)

    def append(self, row: Any) -> None:
        self.extend((row,))

    def extend(self, rows: Iterable[Any]) -> None:
        schema = self._schema
        push = self._push
        i = self._nrows
        for row in rows:
            try:
                each_column(schema, row, push)

            except KeyError as e:
                self.clear()
                raise MalformedSource(
                    f'Row {i} is missing column {e.args[0]!r} of {schema.names}'
                ) from e

            except TypeError as e:
                self.clear()
                raise MalformedSource(f'Row {i} has no named fields: {e}') from e

            i += 1
            self._nrows = i

    def rows(self) -> int:
        return self._nrows

    def clear(self) -> None:
        for col in self._col_lists:
            col.clear()

        self._nrows = 0

    def _take(self) -> dict[str, list[Any]]:
        lengths = [len(col) for col in self._col_lists]
        if lengths and min(lengths) != max(lengths):
            raise MalformedSource(
                f'Column length mismatch at flush: min={min(lengths)}, max={max(lengths)}'
            )

        data = dict(zip(self._names, self._col_lists, strict=True))
        self._col_lists = [[] for _ in self._names]
        self._nrows = 0
        return data

    def flush(self) -> ColumnView:
        return ColumnView(self._take(), schema=self._schema)

    def flush_frame(self) -> pl.DataFrame:
        schema = self._schema.as_polars() if self._schema.known_types else None
        return pl.DataFrame(self._take(), schema=schema)


def to_columns(row_view: RowView | Iterable[Any]) -> ColumnView:
    '''
    Column view of a row view, built in a single buffered pass.

    The result carries the row view's schema.

    '''
    if not isinstance(row_view, RowView):
        row_view = RowView(row_view)

    builder = ColumnBuilder(row_view.schema)
    builder.extend(row_view)

    log.debug(f'buffered {builder.rows():,} rows into {len(builder.schema)} columns')
    return builder.flush()


def to_rows(column_view: ColumnView | Any) -> RowView:
    '''
    Lazy row view of a column view, each row is a proxy bound to one index.

    Column lengths are checked up front.

    '''
    if not isinstance(column_view, ColumnView):
        column_view = ColumnView(column_view)

    nrows = column_view.check_lengths()
    try:
        columns = {
            name: column_view.get_column(name)
            for name in column_view.schema.names
        }

    except KeyError as e:
        raise MalformedSource(
            f'Schema column {e.args[0]!r} not found in {column_view.column_names()}'
        ) from e

    log.debug(f'viewing {len(columns)} columns as {nrows:,} rows')
    return RowView(ColumnsRows(columns, nrows), schema=column_view.schema)
