import msgspec
import polars as pl
import pytest

from native_tables import (
    SchemaMismatch,
    columntable,
    concat_columns,
    concat_rows,
    declare,
    partitions,
    rowcount,
    rowtable,
    to_frame,
)
from native_tables.capability import undeclare
from native_tables.fallback import to_rows
from native_tables.schema import Schema

from native_tables._testing import (
    ColumnSource,
    RowSource,
    StreamSource,
    item_columns,
    item_rows,
    items,
    tick_schema,
    tick_stream,
)


def test_rowtable_from_columns():
    out = rowtable(ColumnSource(item_columns()))
    assert len(out) == 3
    assert all(isinstance(r, msgspec.Struct) for r in out)
    assert [(r.id, r.name) for r in out] == items


def test_rowtable_typed():
    df = pl.DataFrame(list(tick_stream(5)), schema=tick_schema.as_polars())
    out = rowtable(df)
    assert [r.seq for r in out] == list(range(5))
    assert type(out[0]).__struct_fields__ == tick_schema.names


def test_columntable():
    assert columntable(RowSource(item_rows())) == item_columns()
    assert columntable(pl.DataFrame(item_columns())) == item_columns()


def test_to_frame():
    df = to_frame(RowSource(item_rows()))
    assert df.columns == ['id', 'name']
    assert df.rows() == items

    typed = to_frame(RowSource(list(tick_stream(10)), schema=tick_schema))
    assert typed.schema == tick_schema.as_polars()

    same = pl.DataFrame(item_columns())
    assert to_frame(same) is same


def test_rowcount():
    assert rowcount(RowSource(item_rows())) == 3
    assert rowcount(StreamSource(item_rows())) == 3
    assert rowcount(ColumnSource(item_columns())) == 3
    assert rowcount(to_rows(item_columns())) == 3
    assert rowcount([]) == 0


class Sharded:
    def __init__(self, shards):
        self.shards = shards


def test_partitions():
    source = RowSource(item_rows())
    assert list(partitions(source)) == [source]

    declare(
        Sharded,
        rows=lambda s: [r for shard in s.shards for r in shard],
        partitions=lambda s: iter(s.shards),
    )
    try:
        sharded = Sharded([item_rows()[:2], item_rows()[2:]])
        parts = list(partitions(sharded))
        assert len(parts) == 2
        assert rowcount(sharded) == 3

        cols = concat_columns(partitions(sharded))
        assert dict(cols) == item_columns()

    finally:
        undeclare(Sharded)


def test_concat_rows():
    view = concat_rows([item_rows(), [], item_rows()])
    assert view.schema == Schema(('id', 'name'))
    assert [r['id'] for r in view] == [1, 2, 3, 1, 2, 3]
    assert list(concat_rows([])) == []


def test_concat_mismatch():
    with pytest.raises(SchemaMismatch):
        concat_rows([item_rows(), [{'other': 1}]])


def test_concat_empty_first_part():
    view = concat_rows([[], item_rows()])
    assert view.schema == Schema(('id', 'name'))
    assert [r['id'] for r in view] == [1, 2, 3]

    cols = concat_columns([RowSource([]), RowSource(item_rows())])
    assert dict(cols) == item_columns()

    assert concat_rows([[], []]).schema == Schema(())


def test_partitions_empty_first_shard():
    declare(
        Sharded,
        rows=lambda s: [r for shard in s.shards for r in shard],
        partitions=lambda s: iter(s.shards),
    )
    try:
        sharded = Sharded([[], item_rows()])
        assert dict(concat_columns(partitions(sharded))) == item_columns()

    finally:
        undeclare(Sharded)
