'''
Generic field access shared by rows and column containers.

A row answers "which fields do you have" and "what is bound to field n", a
column container answers the same two questions with whole columns as values,
so one pair of accessors serves both views.

'''
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any, Protocol, runtime_checkable

import msgspec
import polars as pl


@runtime_checkable
class Row(Protocol):
    '''
    Protocol for producer defined row (or column container) types that want
    to expose their fields without being a mapping / struct.

    '''
    def column_names(self) -> tuple[str, ...]:
        ...

    def get_column(self, name: str) -> Any:
        ...


def _is_namedtuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and hasattr(obj, '_fields')


def column_names(obj: Any) -> tuple[str, ...]:
    '''
    Field names of a row, or column names of a column container, in the order
    the object itself reports them.

    '''
    match obj:
        case pl.DataFrame():
            return tuple(obj.columns)

        case Row():
            return tuple(obj.column_names())

        case msgspec.Struct():
            return obj.__struct_fields__

        case Mapping():
            return tuple(obj.keys())

        case _ if _is_namedtuple(obj):
            return tuple(obj._fields)

        case _ if is_dataclass(obj) and not isinstance(obj, type):
            return tuple(f.name for f in fields(obj))

    raise TypeError(f'{type(obj).__name__} exposes no named fields')


def get_column(obj: Any, name: str) -> Any:
    '''
    Value bound to `name` on a row, or the column sequence named `name` on a
    column container.

    Raises `KeyError` when the object has no such field.

    '''
    match obj:
        case pl.DataFrame():
            if name not in obj.columns:
                raise KeyError(name)

            return obj.get_column(name)

        case Row():
            return obj.get_column(name)

        case msgspec.Struct():
            if name not in obj.__struct_fields__:
                raise KeyError(name)

            return getattr(obj, name)

        case Mapping():
            # skip __missing__ defaults
            if name not in obj:
                raise KeyError(name)

            return obj[name]

        case _ if _is_namedtuple(obj) or (
            is_dataclass(obj) and not isinstance(obj, type)
        ):
            if name not in column_names(obj):
                raise KeyError(name)

            return getattr(obj, name)

    raise TypeError(f'{type(obj).__name__} exposes no named fields')


def has_fields(obj: Any) -> bool:
    try:
        column_names(obj)

    except TypeError:
        return False

    return True
