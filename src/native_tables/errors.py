class NativeTablesError(Exception):
    ...


class InvalidSchemaError(NativeTablesError, ValueError):
    '''
    Schema construction violated one of its invariants (duplicate names,
    types not aligned with names).

    '''


class NoCapability(NativeTablesError, TypeError):
    '''
    Source is (or claims to be) a table but neither row nor column access
    could be resolved for it.

    '''


class NotATable(NoCapability):
    '''
    Source does not identify as a table and no capability resolves for it.

    '''


class MalformedSource(NativeTablesError, ValueError):
    '''
    Source broke its own shape: a row missing a schema field, columns of
    different lengths, or row / column views that disagree.

    '''


class SchemaMismatch(NativeTablesError, ValueError):
    '''
    Inferred schema differs from the one a sink expects.

    '''
