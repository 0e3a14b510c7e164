'''
Reference producers used across the test-suite, one per capability shape.

'''
from collections import namedtuple
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Generator

import msgspec
import polars as pl

from native_tables.capability import ColumnAccessible, RowAccessible, TableSource
from native_tables.schema import Schema


class Item(msgspec.Struct, frozen=True):
    id: int
    name: str


ItemTuple = namedtuple('ItemTuple', ('id', 'name'))


@dataclass
class ItemRecord:
    id: int
    name: str


items = [(1, 'a'), (2, 'b'), (3, 'c')]


class RowSource(RowAccessible):
    '''Row access only, rows are dicts.'''

    def __init__(self, records: list[dict[str, Any]], schema: Schema | None = None):
        self.records = records
        self._schema = schema

    def rows(self):
        return self.records

    def declared_schema(self) -> Schema | None:
        return self._schema


class StreamSource(RowAccessible):
    '''Row access only, rows come from a one-shot generator.'''

    def __init__(self, records: list[dict[str, Any]]):
        self.records = records
        self.pulled = 0

    def rows(self):
        for r in self.records:
            self.pulled += 1
            yield r


class ColumnSource(ColumnAccessible):
    '''Column access only, columns are lists.'''

    def __init__(self, cols: dict[str, list[Any]]):
        self.cols = cols

    def columns(self):
        return self.cols


class DualSource(RowAccessible, ColumnAccessible):
    '''Both capabilities, backed by separate (possibly disagreeing) data.'''

    def __init__(self, records: list[dict[str, Any]], cols: dict[str, list[Any]]):
        self.records = records
        self.cols = cols

    def rows(self):
        return self.records

    def columns(self):
        return self.cols


class OpaqueTable(TableSource):
    '''Identifies as a table but declares no access.'''


class NotATableAtAll:
    ...


def item_rows() -> list[dict[str, Any]]:
    return [{'id': i, 'name': n} for i, n in items]


def item_columns() -> dict[str, list[Any]]:
    return {'id': [i for i, _ in items], 'name': [n for _, n in items]}


tick_epoch = datetime(year=2024, month=1, day=1, tzinfo=timezone.utc)


def tick_stream(
    count: int = 1_000,
    start: datetime = tick_epoch,
    step: timedelta = timedelta(seconds=1),
) -> Generator[dict[str, Any], None, None]:
    for i in range(count):
        yield {
            'seq': i,
            'time': start + step * i,
            'price': 100.0 + (i % 7) * 0.25,
            'venue': ('xnas', 'xnys', 'arcx')[i % 3],
        }


tick_schema = Schema(
    ('seq', 'time', 'price', 'venue'),
    (pl.Int64, pl.Datetime('us', 'UTC'), pl.Float64, pl.String),
)
