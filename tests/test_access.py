from datetime import date, datetime, timedelta
from decimal import Decimal

import polars as pl
import pytest

from native_tables.access import Row, column_names, get_column, has_fields
from native_tables.dtypes import DataTypeMeta, column_dtype, dtype_for, py_type_for

from native_tables._testing import Item, ItemRecord, ItemTuple


class Pair:
    def column_names(self):
        return ('left', 'right')

    def get_column(self, name):
        if name not in ('left', 'right'):
            raise KeyError(name)

        return name.upper()


@pytest.mark.parametrize(
    'row',
    [Item(1, 'a'), ItemTuple(1, 'a'), ItemRecord(1, 'a'), {'id': 1, 'name': 'a'}],
)
def test_row_kinds(row):
    assert column_names(row) == ('id', 'name')
    assert get_column(row, 'id') == 1
    assert get_column(row, 'name') == 'a'
    with pytest.raises(KeyError):
        get_column(row, 'missing')


def test_struct_methods_are_not_fields():
    with pytest.raises(KeyError):
        get_column(Item(1, 'a'), '__struct_fields__')


def test_row_protocol():
    p = Pair()
    assert isinstance(p, Row)
    assert column_names(p) == ('left', 'right')
    assert get_column(p, 'left') == 'LEFT'


def test_frame_columns():
    df = pl.DataFrame({'a': [1, 2], 'b': [3, 4]})
    assert column_names(df) == ('a', 'b')
    assert get_column(df, 'b').to_list() == [3, 4]
    with pytest.raises(KeyError):
        get_column(df, 'c')


def test_no_fields():
    assert not has_fields(3)
    assert not has_fields(ItemRecord)
    assert has_fields({})
    with pytest.raises(TypeError):
        column_names((1, 2))
    with pytest.raises(TypeError):
        get_column(3, 'a')


def test_dtype_for():
    assert dtype_for(int) == pl.Int64
    assert dtype_for(bool) == pl.Boolean
    assert dtype_for(datetime) == pl.Datetime
    assert dtype_for(date) == pl.Date
    assert dtype_for(timedelta) == pl.Duration
    assert dtype_for(Decimal) == pl.Decimal
    assert dtype_for(pl.UInt8) == pl.UInt8
    with pytest.raises(TypeError):
        dtype_for(object)


def test_column_dtype():
    assert column_dtype(pl.Series([1.0])) == pl.Float64
    assert column_dtype([1.0]) is None


def test_py_type_for():
    assert py_type_for(pl.Int32) is int
    assert py_type_for(pl.List(pl.String)) == list[str]


@pytest.mark.parametrize(
    'dtype',
    [
        pl.Int64,
        pl.String,
        pl.Datetime('ms', 'UTC'),
        pl.Duration('ns'),
        pl.Decimal(10, 2),
        pl.List(pl.Int8),
        pl.Array(pl.Float32, 3),
    ],
)
def test_dtype_meta(dtype):
    meta = DataTypeMeta.from_dtype(dtype)
    assert DataTypeMeta.from_bytes(meta.to_bytes()).decode() == dtype


def test_dtype_meta_struct_unsupported():
    with pytest.raises(NotImplementedError):
        DataTypeMeta.from_dtype(pl.Struct({'a': pl.Int8}))


def test_tz_aware_datetime_tag():
    meta = DataTypeMeta.from_dtype(pl.Datetime('us', 'UTC'))
    assert meta.tag == 'datetime'
    assert meta.kwargs == {'time_unit': 'us', 'time_zone': 'UTC'}
