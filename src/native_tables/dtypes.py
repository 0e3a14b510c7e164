'''
# Column type descriptors

Column types are plain `polars` data types, either the class (`pl.Int64`) or a
parametrized instance (`pl.Datetime('us', 'UTC')`). Producers that only know
python types may declare those instead, they get normalized through
`dtype_for`.

Types are only ever recorded when they are statically known (a typed column
container or an explicit producer declaration), row values are never sampled
to guess a type.

'''

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from inspect import isclass
from typing import Any, Literal

import polars as pl

from native_tables.structs import FrozenStruct


DataType = type[pl.DataType] | pl.DataType

# anything `dtype_for` accepts
DataTypeLike = DataType | type


# python builtin types a producer may declare, first match wins so `bool`
# must come before `int`
python_dtype_map: dict[type, DataType] = {
    bool: pl.Boolean,
    int: pl.Int64,
    float: pl.Float64,
    str: pl.String,
    bytes: pl.Binary,
    Decimal: pl.Decimal,
    datetime: pl.Datetime,
    date: pl.Date,
    time: pl.Time,
    timedelta: pl.Duration,
}


def class_of(dtype: DataType) -> type[pl.DataType]:
    return type(dtype) if not isclass(dtype) else dtype


def is_dtype(obj: Any) -> bool:
    return isinstance(obj, pl.DataType) or (
        isclass(obj) and issubclass(obj, pl.DataType)
    )


def dtype_for(obj: DataTypeLike) -> DataType:
    '''
    Normalize a declared column type into a polars data type.

    '''
    if is_dtype(obj):
        return obj

    if isclass(obj):
        for py_type, dtype in python_dtype_map.items():
            if issubclass(obj, py_type):
                return dtype

    raise TypeError(f'Cannot map {obj!r} to a column data type')


def column_dtype(column: Any) -> DataType | None:
    '''
    Statically known element type of a column container, or None when the
    container carries no type information (plain lists, tuples, ...).

    '''
    match column:
        case pl.Series():
            return column.dtype

    return None


def py_type_for(dtype: DataType) -> Any:
    '''
    Python type a column of `dtype` maps to, used when generating row
    structs from a schema.

    '''
    if isinstance(dtype, pl.List | pl.Array):
        return list[py_type_for(dtype.inner)]

    if class_of(dtype) in (pl.Struct, pl.Object, pl.Null):
        return Any

    return dtype.to_python()


# data type serialization

# a tiny, serializable dtype tag
DTypeTag = Literal[
    'u8',
    'u16',
    'u32',
    'u64',
    'i8',
    'i16',
    'i32',
    'i64',
    'i128',
    'f32',
    'f64',
    'decimal',
    'bool',
    'date',
    'time',
    'datetime',
    'duration',
    'binary',
    'string',
    'categorical',
    'null',

    # nested sequences
    'list',
    'array'
]

# Maps between runtime dtype classes and tags
dtype_tag_map: dict[type[pl.DataType], DTypeTag] = {
    pl.UInt8: 'u8',
    pl.UInt16: 'u16',
    pl.UInt32: 'u32',
    pl.UInt64: 'u64',
    pl.Int8: 'i8',
    pl.Int16: 'i16',
    pl.Int32: 'i32',
    pl.Int64: 'i64',
    pl.Int128: 'i128',
    pl.Float32: 'f32',
    pl.Float64: 'f64',
    pl.Decimal: 'decimal',
    pl.Boolean: 'bool',
    pl.Date: 'date',
    pl.Time: 'time',
    pl.Datetime: 'datetime',
    pl.Duration: 'duration',
    pl.Binary: 'binary',
    pl.String: 'string',
    pl.Categorical: 'categorical',
    pl.Null: 'null',
    pl.List: 'list',
    pl.Array: 'array'
}

# inverse of dtype_tag_map
tag_dtype_map: dict[DTypeTag, type[pl.DataType]] = {
    v: k for (k, v) in dtype_tag_map.items()
}


class DataTypeMeta(FrozenStruct, frozen=True):
    tag: DTypeTag
    kwargs: dict[str, Any] = {}

    @staticmethod
    def from_dtype(dtype: DataType) -> DataTypeMeta:
        kwargs: dict[str, Any] = {}
        match dtype:
            case pl.Decimal():
                kwargs['precision'] = dtype.precision
                kwargs['scale'] = dtype.scale

            case pl.Datetime():
                kwargs['time_unit'] = dtype.time_unit
                kwargs['time_zone'] = dtype.time_zone

            case pl.Duration():
                kwargs['time_unit'] = dtype.time_unit

            case pl.Array():
                kwargs['inner'] = DataTypeMeta.from_dtype(dtype.inner)
                kwargs['shape'] = dtype.shape

            case pl.List():
                kwargs['inner'] = DataTypeMeta.from_dtype(dtype.inner)

            case _ if dtype.is_nested():
                raise NotImplementedError(
                    f'Only List or Array nested types supported, got: {dtype}'
                )

        cls = class_of(dtype)
        if cls not in dtype_tag_map:
            raise NotImplementedError(f'No serialization tag for {dtype}')

        return DataTypeMeta(tag=dtype_tag_map[cls], kwargs=kwargs)

    def decode(self) -> DataType:
        cls = tag_dtype_map[self.tag]

        match cls:
            case pl.List | pl.Array:
                inner = DataTypeMeta.convert(self.kwargs['inner']).decode()
                if cls is pl.Array:
                    return pl.Array(inner, shape=tuple(self.kwargs['shape']))

                return pl.List(inner)

            case _ if self.kwargs:
                return cls(**self.kwargs)

        return cls
