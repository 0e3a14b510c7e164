'''
Glossary:
    - Row access: handing out rows, in order, each with named fields.
    - Column access: handing out named, equal length column sequences.
    - Schema: column names plus column types, or `UNKNOWN` types.
    - Sink: a consumer building its own table layout from either view.
    - Fallback: deriving the view a source lacks from the one it has.

'''

from .errors import (
    NativeTablesError as NativeTablesError,
    InvalidSchemaError as InvalidSchemaError,
    NoCapability as NoCapability,
    NotATable as NotATable,
    MalformedSource as MalformedSource,
    SchemaMismatch as SchemaMismatch,
)

from .access import (
    Row as Row,
    column_names as column_names,
    get_column as get_column,
)

from .schema import (
    Schema as Schema,
    UNKNOWN as UNKNOWN,
    check_schema as check_schema,
)

from .views import RowView as RowView, ColumnView as ColumnView

from .capability import (
    Capability as Capability,
    TableSource as TableSource,
    RowAccessible as RowAccessible,
    ColumnAccessible as ColumnAccessible,
    declare as declare,
    declares_row_access as declares_row_access,
    declares_column_access as declares_column_access,
    is_table as is_table,
    resolve as resolve,
)

from .fallback import (
    ColumnBuilder as ColumnBuilder,
    each_column as each_column,
    to_columns as to_columns,
    to_rows as to_rows,
)

from .interface import (
    rows as rows,
    columns as columns,
    schema as schema,
    verify as verify,
)

from .materialize import (
    rowtable as rowtable,
    columntable as columntable,
    to_frame as to_frame,
    rowcount as rowcount,
    partitions as partitions,
    concat_rows as concat_rows,
    concat_columns as concat_columns,
)

from .frames import declare_polars

declare_polars()
