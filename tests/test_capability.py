import polars as pl
import pytest

from native_tables.capability import (
    Capability,
    declaration_for,
    declare,
    declares_column_access,
    declares_row_access,
    is_table,
    probe,
    resolve,
    undeclare,
)

from native_tables._testing import (
    ColumnSource,
    DualSource,
    NotATableAtAll,
    OpaqueTable,
    RowSource,
    item_columns,
    item_rows,
)


def test_declared_bases():
    assert declares_row_access(RowSource)
    assert not declares_column_access(RowSource)

    assert declares_column_access(ColumnSource)
    assert not declares_row_access(ColumnSource)

    assert declares_row_access(DualSource) and declares_column_access(DualSource)

    assert not declares_row_access(OpaqueTable)
    assert not declares_column_access(OpaqueTable)


def test_resolve_declared():
    assert resolve(RowSource(item_rows())) == Capability.ROWS
    assert resolve(ColumnSource(item_columns())) == Capability.COLUMNS
    assert resolve(DualSource(item_rows(), item_columns())) == Capability.BOTH
    assert resolve(OpaqueTable()) == Capability.NEITHER


def test_is_table():
    assert is_table(RowSource([]))
    assert is_table(OpaqueTable())
    assert is_table(pl.DataFrame({'a': [1]}))

    # probed sources work but do not self identify
    assert not is_table(item_rows())
    assert not is_table(NotATableAtAll())


def test_probe():
    assert probe(item_rows()) == Capability.ROWS
    assert probe(iter(item_rows())) == Capability.ROWS
    assert probe(item_columns()) == Capability.COLUMNS
    assert probe({}) == Capability.COLUMNS
    assert probe({'a': pl.Series([1, 2])}) == Capability.COLUMNS

    # a lone row is not a table
    assert probe({'id': 1, 'name': 'a'}) == Capability.NEITHER
    assert probe('abc') == Capability.NEITHER
    assert probe(42) == Capability.NEITHER
    assert probe(NotATableAtAll()) == Capability.NEITHER


def test_probe_disabled(monkeypatch):
    monkeypatch.setenv('NATIVE_TABLES_PROBE', 'false')
    assert resolve(item_rows()) == Capability.NEITHER
    # declarations still resolve
    assert resolve(RowSource(item_rows())) == Capability.ROWS


def test_declaration_wins_over_probe():
    class Records(list):
        ...

    assert resolve(Records(item_rows())) == Capability.ROWS

    declare(Records, columns=lambda r: {'n': list(range(len(r)))})
    try:
        assert resolve(Records(item_rows())) == Capability.COLUMNS
        assert declares_column_access(Records)
        assert not declares_row_access(Records)

    finally:
        undeclare(Records)

    assert declaration_for(Records) is None


def test_declaration_follows_mro():
    class Base:
        ...

    class Child(Base):
        ...

    declare(Base, rows=lambda b: [])
    try:
        assert declares_row_access(Child)
        assert is_table(Child())

    finally:
        undeclare(Base)


def test_declare_not_a_table():
    class Thing:
        ...

    declare(Thing, istable=False)
    try:
        assert resolve(Thing()) == Capability.NEITHER
        assert not is_table(Thing())

    finally:
        undeclare(Thing)


def test_polars_declarations():
    assert resolve(pl.DataFrame({'a': [1]})) == Capability.BOTH
    assert resolve(pl.LazyFrame({'a': [1]})) == Capability.COLUMNS


def test_capability_flags():
    assert Capability.ROWS in Capability.BOTH
    assert Capability.COLUMNS in Capability.BOTH
    assert Capability.ROWS not in Capability.NEITHER
    assert Capability.ROWS | Capability.COLUMNS == Capability.BOTH


@pytest.mark.parametrize('value', ['true', '1'])
def test_settings_bool_parsing(monkeypatch, value):
    from native_tables.config import get_settings

    monkeypatch.setenv('NATIVE_TABLES_VERIFY_DUAL', value)
    assert get_settings().verify_dual
