import os

from native_tables.structs import FrozenStruct


env_prefix = 'NATIVE_TABLES_'


class Settings(FrozenStruct, frozen=True):
    # allow runtime probing of sources that declare nothing
    probe: bool = True
    # cross check row & column views of sources declaring both
    verify_dual: bool = False
    loglevel: str = 'info'


def get_settings() -> Settings:
    '''
    Build `Settings` from `NATIVE_TABLES_*` environment variables, read on
    every call.

    '''
    raw = {
        field: os.environ[env_prefix + field.upper()]
        for field in Settings.__struct_fields__
        if env_prefix + field.upper() in os.environ
    }
    return Settings.convert(raw, strict=False)
