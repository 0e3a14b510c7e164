'''
# Capability resolution

A producer tells the layer which table shape it can hand out natively, either
by subclassing one of the declaration bases:

    class MyRows(RowAccessible):
        def rows(self): ...

or, for types it does not own, through the declaration registry:

    declare(SomeFrame, columns=lambda f: f.to_dict())

Declarations are looked up along the MRO of the source type. Only when a type
declares nothing the resolver falls back to probing the value at runtime.

'''
from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, ClassVar

import msgspec
import polars as pl

from native_tables.config import get_settings
from native_tables.schema import Schema


log = logging.getLogger(__name__)


class Capability(enum.Flag):
    NEITHER = 0
    ROWS = enum.auto()
    COLUMNS = enum.auto()
    BOTH = ROWS | COLUMNS


class TableSource:
    '''
    Base for producer types that identify as tables.

    Subclassing only this declares a table with neither capability.

    '''
    istable: ClassVar[bool] = True

    def declared_schema(self) -> Schema | None:
        '''
        Override to supply an explicit schema, covering sources whose shape
        cannot be inferred from data (e.g. an empty row source).

        '''
        return None


class RowAccessible(TableSource, abc.ABC):
    @abc.abstractmethod
    def rows(self) -> Iterable[Any]:
        '''Rows in native order.'''


class ColumnAccessible(TableSource, abc.ABC):
    @abc.abstractmethod
    def columns(self) -> Any:
        '''Column container, anything `column_names` / `get_column` accept.'''


class Declaration(msgspec.Struct, frozen=True):
    istable: bool = True
    rows: Callable[[Any], Iterable[Any]] | None = None
    columns: Callable[[Any], Any] | None = None
    schema: Callable[[Any], Schema | None] | None = None
    partitions: Callable[[Any], Iterable[Any]] | None = None

    @property
    def capability(self) -> Capability:
        cap = Capability.NEITHER
        if self.rows is not None:
            cap |= Capability.ROWS

        if self.columns is not None:
            cap |= Capability.COLUMNS

        return cap


_registry: dict[type, Declaration] = {}


def declare(
    cls: type,
    *,
    rows: Callable[[Any], Iterable[Any]] | None = None,
    columns: Callable[[Any], Any] | None = None,
    schema: Callable[[Any], Schema | None] | None = None,
    partitions: Callable[[Any], Iterable[Any]] | None = None,
    istable: bool = True,
) -> Declaration:
    '''
    Register table capabilities for `cls` (and its subclasses) without
    touching the class itself.

    '''
    decl = Declaration(
        istable=istable,
        rows=rows,
        columns=columns,
        schema=schema,
        partitions=partitions,
    )
    _registry[cls] = decl
    log.debug(f'declared {cls.__name__}: {decl.capability}')
    return decl


def undeclare(cls: type) -> None:
    _registry.pop(cls, None)


def _declaration_from_bases(cls: type) -> Declaration | None:
    if not issubclass(cls, TableSource):
        return None

    return Declaration(
        istable=cls.istable,
        rows=cls.rows if issubclass(cls, RowAccessible) else None,
        columns=cls.columns if issubclass(cls, ColumnAccessible) else None,
        schema=cls.declared_schema,
    )


def declaration_for(cls: type) -> Declaration | None:
    '''
    Explicit declaration for `cls`, registry entries first, then the
    declaration base classes, or None if `cls` declares nothing.

    '''
    for base in cls.__mro__:
        if base in _registry:
            return _registry[base]

    return _declaration_from_bases(cls)


def declares_row_access(cls: type) -> bool:
    decl = declaration_for(cls)
    return decl is not None and decl.rows is not None


def declares_column_access(cls: type) -> bool:
    decl = declaration_for(cls)
    return decl is not None and decl.columns is not None


def is_table(source: Any) -> bool:
    '''
    Whether `source` self identifies as a table, false unless declared.

    '''
    decl = declaration_for(type(source))
    return decl is not None and decl.istable


def _is_column(obj: Any) -> bool:
    return isinstance(obj, pl.Series) or (
        isinstance(obj, Sequence) and not isinstance(obj, str | bytes)
    )


def probe(source: Any) -> Capability:
    '''
    Structural runtime check for sources that declare nothing.

    A mapping of sequences is column access, any other (non string, non
    mapping) iterable is row access. Element values are never pulled.

    '''
    if isinstance(source, Mapping):
        if all(_is_column(v) for v in source.values()):
            return Capability.COLUMNS

        return Capability.NEITHER

    if isinstance(source, Iterable) and not isinstance(source, str | bytes):
        return Capability.ROWS

    return Capability.NEITHER


def resolve(source: Any) -> Capability:
    decl = declaration_for(type(source))
    if decl is not None:
        return decl.capability

    if not get_settings().probe:
        return Capability.NEITHER

    cap = probe(source)
    log.debug(f'probed {type(source).__name__}: {cap}')
    return cap
