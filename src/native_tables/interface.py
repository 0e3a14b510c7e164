from __future__ import annotations

import logging
from typing import Any

from native_tables.access import column_names
from native_tables.capability import (
    Capability,
    Declaration,
    declaration_for,
    is_table,
    resolve,
)
from native_tables.config import get_settings
from native_tables.errors import MalformedSource, NoCapability, NotATable
from native_tables.fallback import to_columns, to_rows
from native_tables.schema import Schema
from native_tables.views import ColumnView, RowView


log = logging.getLogger(__name__)


def _no_capability(source: Any, wanted: str) -> NoCapability:
    name = type(source).__name__
    if not is_table(source):
        return NotATable(f'{name} is not a table, cannot get {wanted}')

    return NoCapability(f'{name} declares neither row nor column access')


def _declared_schema(decl: Declaration | None, source: Any) -> Schema | None:
    if decl is None or decl.schema is None:
        return None

    return decl.schema(source)


def _native_rows(source: Any, decl: Declaration | None) -> RowView:
    if decl is not None and decl.rows is not None:
        return RowView(decl.rows(source), schema=_declared_schema(decl, source))

    # probed row source, the value is its own row iterable
    return RowView(source)


def _native_columns(source: Any, decl: Declaration | None) -> ColumnView:
    if decl is not None and decl.columns is not None:
        return ColumnView(decl.columns(source), schema=_declared_schema(decl, source))

    # probed column source, the value is its own column container
    return ColumnView(source)


def rows(source: Any) -> RowView:
    '''
    Row view of any table source, native when the source declares row access,
    otherwise synthesized from its columns.

    '''
    if isinstance(source, RowView):
        return source

    if isinstance(source, ColumnView):
        return to_rows(source)

    cap = resolve(source)
    decl = declaration_for(type(source))

    if cap == Capability.BOTH and get_settings().verify_dual:
        verify(source)

    if Capability.ROWS in cap:
        return _native_rows(source, decl)

    if Capability.COLUMNS in cap:
        log.debug(f'{type(source).__name__} has no row access, using column fallback')
        return to_rows(_native_columns(source, decl))

    raise _no_capability(source, 'rows')


def columns(source: Any) -> ColumnView:
    '''
    Column view of any table source, native when the source declares column
    access, otherwise buffered from its rows.

    '''
    if isinstance(source, ColumnView):
        return source

    if isinstance(source, RowView):
        return to_columns(source)

    cap = resolve(source)
    decl = declaration_for(type(source))

    if cap == Capability.BOTH and get_settings().verify_dual:
        verify(source)

    if Capability.COLUMNS in cap:
        return _native_columns(source, decl)

    if Capability.ROWS in cap:
        log.debug(f'{type(source).__name__} has no column access, using row fallback')
        return to_columns(_native_rows(source, decl))

    raise _no_capability(source, 'columns')


def schema(source: Any) -> Schema:
    '''
    Schema of a row view, column view or any table source.

    Column access is preferred for inference, a row source has its first row
    pulled. For one-shot iterators ask the view instead (`rows(it).schema`),
    only the view keeps the pulled row for later iteration.

    '''
    if isinstance(source, RowView | ColumnView):
        return source.schema

    cap = resolve(source)
    if cap == Capability.NEITHER:
        raise _no_capability(source, 'a schema')

    declared = _declared_schema(declaration_for(type(source)), source)
    if declared is not None:
        return declared

    if Capability.COLUMNS in cap:
        return columns(source).schema

    return rows(source).schema


def verify(source: Any) -> None:
    '''
    Cross check the native row and column views of a source declaring both,
    raising `MalformedSource` if they disagree on column names or row count.

    Materializes both views.

    '''
    decl = declaration_for(type(source))
    if decl is None or decl.capability != Capability.BOTH:
        return

    row_view = _native_rows(source, decl)
    col_view = _native_columns(source, decl)

    col_rows = col_view.check_lengths()
    names = set(col_view.column_names())
    nrows = 0
    for row in row_view:
        if nrows == 0 and set(column_names(row)) != names:
            raise MalformedSource(
                f'Row fields {column_names(row)} differ from'
                f' columns {col_view.column_names()}'
            )

        nrows += 1

    if nrows != col_rows:
        raise MalformedSource(
            f'Row view has {nrows} rows but columns have {col_rows}'
        )
