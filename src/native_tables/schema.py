from __future__ import annotations

from functools import cached_property
from inspect import isclass
from typing import Any, Final, Iterable, Iterator

import msgspec
import polars as pl

from native_tables.access import column_names, get_column
from native_tables.dtypes import (
    DataType,
    DataTypeLike,
    DataTypeMeta,
    class_of,
    column_dtype,
    dtype_for,
    py_type_for,
)
from native_tables.errors import InvalidSchemaError, MalformedSource, SchemaMismatch
from native_tables.structs import FrozenStruct


class UnknownTypes:
    '''
    Marker for "column types not determinable without materializing data".

    There is exactly one instance, `UNKNOWN`.

    '''
    _instance: UnknownTypes | None = None

    def __new__(cls) -> UnknownTypes:
        if cls._instance is None:
            cls._instance = super().__new__(cls)

        return cls._instance

    def __repr__(self) -> str:
        return 'UNKNOWN'

    def __reduce__(self):
        return (UnknownTypes, ())


UNKNOWN: Final = UnknownTypes()

Types = tuple[DataType, ...] | UnknownTypes


class SchemaMeta(FrozenStruct, frozen=True):
    names: list[str]
    # None encodes UNKNOWN
    types: list[DataTypeMeta] | None = None


class Schema:
    def __init__(
        self,
        names: Iterable[str],
        types: Iterable[DataTypeLike] | UnknownTypes = UNKNOWN,
    ) -> None:
        self._names: tuple[str, ...] = tuple(names)

        seen: set[str] = set()
        for name in self._names:
            if name in seen:
                raise InvalidSchemaError(f'Duplicate column name {name!r}')

            seen.add(name)

        self._types: Types
        if isinstance(types, UnknownTypes):
            self._types = UNKNOWN

        else:
            self._types = tuple(dtype_for(t) for t in types)
            if len(self._types) != len(self._names):
                raise InvalidSchemaError(
                    f'Got {len(self._types)} types for {len(self._names)} columns'
                )

    @staticmethod
    def from_like(s: SchemaLike) -> Schema:
        match s:
            case Schema():
                return s

            # pl.Schema is a dict subclass, match it first
            case pl.Schema():
                return Schema.from_polars(s)

            case dict() if 'names' not in s:
                return Schema.from_polars(s)

            case dict() | SchemaMeta():
                if isinstance(s, dict):
                    s = SchemaMeta.convert(s)

                return Schema(
                    s.names,
                    [t.decode() for t in s.types] if s.types is not None else UNKNOWN,
                )

        # iterable of (name, type) pairs
        pairs = tuple(s)
        return Schema((p[0] for p in pairs), (p[1] for p in pairs))

    @staticmethod
    def from_polars(s: pl.Schema | dict[str, DataType]) -> Schema:
        return Schema(s.keys(), s.values())

    @staticmethod
    def from_row(row: Any) -> Schema:
        '''
        Schema of a row source, names taken from its first row, types unknown
        since rows carry no declared column types.

        '''
        try:
            names = column_names(row)

        except TypeError as e:
            raise MalformedSource(
                f'First row of type {type(row).__name__} has no named fields'
            ) from e

        return Schema(names)

    @staticmethod
    def from_columns(cols: Any) -> Schema:
        '''
        Schema of a column container, names in declaration order, types known
        only if every column carries its own element type.

        '''
        names = column_names(cols)
        types = []
        for name in names:
            dtype = column_dtype(get_column(cols, name))
            if dtype is None:
                return Schema(names)

            types.append(dtype)

        return Schema(names, types)

    @staticmethod
    def empty() -> Schema:
        return Schema(())

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def types(self) -> Types:
        return self._types

    @property
    def known_types(self) -> bool:
        return not isinstance(self._types, UnknownTypes)

    @cached_property
    def _index(self) -> dict[str, int]:
        return {name: i for i, name in enumerate(self._names)}

    def index(self, name: str) -> int:
        try:
            return self._index[name]

        except KeyError:
            raise KeyError(f'No column {name!r} in {self}') from None

    def type_of(self, name: str) -> DataType | None:
        if isinstance(self._types, UnknownTypes):
            return None

        return self._types[self.index(name)]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented

        return self._names == other._names and self._types == other._types

    def __hash__(self) -> int:
        # dtype classes equal their parametrized instances, hash the class
        if isinstance(self._types, UnknownTypes):
            return hash((self._names, self._types))

        return hash((self._names, tuple(class_of(t) for t in self._types)))

    def __repr__(self) -> str:
        return f'Schema(names={self._names!r}, types={self._types!r})'

    def as_polars(self) -> pl.Schema:
        if isinstance(self._types, UnknownTypes):
            raise SchemaMismatch(
                'Schema types are unknown, cannot build a polars schema'
            )

        return pl.Schema(zip(self._names, self._types))

    @cached_property
    def row_struct(self) -> type[msgspec.Struct]:
        '''
        `msgspec.Struct` type with one field per column, in schema order, used
        to materialize rows.

        '''
        if isinstance(self._types, UnknownTypes):
            py_types = [Any] * len(self._names)

        else:
            py_types = [py_type_for(t) for t in self._types]

        return msgspec.defstruct(
            'Row',
            list(zip(self._names, py_types)),
            module='native_tables.autogen',
        )

    def pretty_str(self) -> str:
        '''Return a human-readable representation of the schema.'''
        lines = ['Schema:']
        for i, name in enumerate(self._names):
            if isinstance(self._types, UnknownTypes):
                type_name = 'unknown'

            else:
                dtype = self._types[i]
                type_name = dtype.__name__ if isclass(dtype) else str(dtype)

            lines.append(f'  - {name}: {type_name}')

        return '\n'.join(lines)

    def encode(self) -> SchemaMeta:
        return SchemaMeta(
            names=list(self._names),
            types=(
                [DataTypeMeta.from_dtype(t) for t in self._types]
                if not isinstance(self._types, UnknownTypes)
                else None
            ),
        )


SchemaLike = Schema | SchemaMeta | dict | pl.Schema | Iterable[tuple[str, DataTypeLike]]


def check_schema(
    actual: Schema,
    expected: SchemaLike,
    *,
    strict_types: bool = False,
) -> None:
    '''
    Raise `SchemaMismatch` if `actual` does not satisfy the schema a sink
    `expected`.

    Names must match exactly (same order), types must match when both sides
    know them. With `strict_types` an unknown side only matches another
    unknown side.

    '''
    expected = Schema.from_like(expected)

    if actual.names != expected.names:
        missing = [n for n in expected.names if n not in actual]
        extra = [n for n in actual.names if n not in expected]
        raise SchemaMismatch(
            f'Column names differ, expected {expected.names}, got {actual.names}'
            f' (missing: {missing}, extra: {extra})'
        )

    if actual.known_types and expected.known_types:
        for name, got, want in zip(actual.names, actual.types, expected.types):
            if got != want:
                raise SchemaMismatch(
                    f'Column {name!r} has type {got}, expected {want}'
                )

    elif strict_types and actual.known_types != expected.known_types:
        raise SchemaMismatch(
            f'Column types differ, expected {expected.types}, got {actual.types}'
        )
