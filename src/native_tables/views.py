'''
The two canonical table shapes.

`RowView` and `ColumnView` wrap whatever a producer hands out without copying
it, they only add a schema and the access contract consumers rely on.

'''
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence, Sized
from itertools import chain
from typing import Any, overload

from native_tables.access import column_names, get_column
from native_tables.errors import MalformedSource
from native_tables.schema import Schema


# exhausted iterator marker
_END = object()


class RowView:
    '''
    Finite, ordered sequence of rows.

    Iteration yields the exact objects the underlying iterable yields. When the
    underlying iterable is a one-shot iterator, inferring the schema pulls the
    first row and keeps it around so the next iteration still starts at it.

    '''

    def __init__(self, source: Iterable[Any], schema: Schema | None = None) -> None:
        self._source = source
        self._schema = schema
        self._oneshot = iter(source) is source
        self._head: list[Any] = []

    @property
    def source(self) -> Iterable[Any]:
        return self._source

    @property
    def nrows(self) -> int | None:
        if isinstance(self._source, Sized):
            return len(self._source)

        return None

    def first(self) -> Any | None:
        '''
        First row or None if the view is empty, without losing it for later
        iteration.

        '''
        if self._oneshot:
            if not self._head:
                row = next(self._source, _END)
                if row is _END:
                    return None

                self._head.append(row)

            return self._head[0]

        for row in self._source:
            return row

        return None

    @property
    def schema(self) -> Schema:
        if self._schema is None:
            row = self.first()
            self._schema = Schema.empty() if row is None else Schema.from_row(row)

        return self._schema

    def __iter__(self) -> Iterator[Any]:
        if self._head:
            head = self._head[:]
            self._head.clear()
            return chain(head, self._source)

        return iter(self._source)

    def __repr__(self) -> str:
        return f'RowView({type(self._source).__name__}, schema={self._schema!r})'


class ColumnView(Mapping):
    '''
    Read-only `name -> column` mapping over a producer's column container.

    Columns are returned as the producer stores them (lists, polars Series,
    ...), in declaration order.

    '''

    def __init__(self, source: Any, schema: Schema | None = None) -> None:
        self._source = source
        self._schema = schema
        self._names = column_names(source)

    @property
    def source(self) -> Any:
        return self._source

    @property
    def schema(self) -> Schema:
        if self._schema is None:
            self._schema = Schema.from_columns(self._source)

        return self._schema

    @property
    def nrows(self) -> int:
        if not self._names:
            return 0

        return len(self.get_column(self._names[0]))

    def column_names(self) -> tuple[str, ...]:
        return self._names

    def get_column(self, name: str) -> Sequence[Any]:
        if name not in self._names:
            raise KeyError(name)

        return get_column(self._source, name)

    def check_lengths(self) -> int:
        '''
        Verify every column has the same length and return it.

        '''
        lengths = {name: len(self.get_column(name)) for name in self._names}
        if len(set(lengths.values())) > 1:
            raise MalformedSource(f'Column length mismatch: {lengths}')

        return next(iter(lengths.values()), 0)

    def __getitem__(self, name: str) -> Sequence[Any]:
        return self.get_column(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f'ColumnView({type(self._source).__name__}, names={self._names!r})'


class ColumnsRow(Mapping):
    '''
    Row proxy bound to one index of a set of columns, field lookups read
    straight from the column.

    '''
    __slots__ = ('_columns', '_index')

    def __init__(self, columns: dict[str, Sequence[Any]], index: int) -> None:
        self._columns = columns
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    def column_names(self) -> tuple[str, ...]:
        return tuple(self._columns)

    def get_column(self, name: str) -> Any:
        return self._columns[name][self._index]

    def __getitem__(self, name: str) -> Any:
        return self.get_column(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f'ColumnsRow({self._index}, {dict(self)!r})'


class ColumnsRows(Sequence):
    '''
    Lazy, restartable sequence of `ColumnsRow` proxies over equal length
    columns.

    '''

    def __init__(self, columns: dict[str, Sequence[Any]], nrows: int) -> None:
        self._columns = columns
        self._nrows = nrows

    @overload
    def __getitem__(self, i: int) -> ColumnsRow: ...

    @overload
    def __getitem__(self, i: slice) -> list[ColumnsRow]: ...

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self[j] for j in range(*i.indices(self._nrows))]

        if i < 0:
            i += self._nrows

        if not 0 <= i < self._nrows:
            raise IndexError(f'Row index {i} out of range for {self._nrows} rows')

        return ColumnsRow(self._columns, i)

    def __iter__(self) -> Iterator[ColumnsRow]:
        columns = self._columns
        for i in range(self._nrows):
            yield ColumnsRow(columns, i)

    def __len__(self) -> int:
        return self._nrows
