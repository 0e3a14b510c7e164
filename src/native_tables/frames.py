'''
Table declarations for polars frames.

A `pl.DataFrame` is columnar storage that can also iterate rows, so it declares
both capabilities. A `pl.LazyFrame` only becomes data once collected, it
declares column access through `collect()` and a schema that needs no data.

'''
import polars as pl

from native_tables.capability import declare
from native_tables.schema import Schema


def _frame_rows(df: pl.DataFrame):
    return df.iter_rows(named=True)


def _frame_columns(df: pl.DataFrame) -> pl.DataFrame:
    return df


def _frame_schema(df: pl.DataFrame) -> Schema:
    return Schema.from_polars(df.schema)


def _lazy_columns(lf: pl.LazyFrame) -> pl.DataFrame:
    return lf.collect()


def _lazy_schema(lf: pl.LazyFrame) -> Schema:
    return Schema.from_polars(lf.collect_schema())


def declare_polars() -> None:
    declare(
        pl.DataFrame,
        rows=_frame_rows,
        columns=_frame_columns,
        schema=_frame_schema,
    )
    declare(
        pl.LazyFrame,
        columns=_lazy_columns,
        schema=_lazy_schema,
    )
