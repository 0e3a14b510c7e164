from datetime import date, datetime
import json

from pathlib import Path
from typing import Any, Self, Type

import msgspec


class ExtendedEncoder(json.JSONEncoder):
    '''
    stdlib JSONEncoder that supports date types & `pathlib.Path`

    '''
    def default(self, o):
        if isinstance(o, datetime):
            return o.isoformat()

        if isinstance(o, date):
            return o.strftime('%Y-%m-%d')

        if isinstance(o, Path):
            return str(o)

        return super().default(o)


def ext_enc_hook(obj: Any) -> Any:
    match obj:
        case Path():
            return str(obj)

    raise NotImplementedError(f'Objects of type {type(obj)} are not supported')


def ext_dec_hook(type: Type, obj: Any) -> Any:
    if type is Path:
        return Path(obj)

    raise NotImplementedError(f'Objects of type {type} are not supported')


class _Struct:
    @classmethod
    def from_json(cls, s: str | bytes) -> Self:
        return msgspec.json.decode(s, type=cls, dec_hook=ext_dec_hook)

    @classmethod
    def from_bytes(cls, raw: bytes) -> Self:
        return msgspec.msgpack.decode(raw, type=cls, dec_hook=ext_dec_hook)

    def to_bytes(self) -> bytes:
        return msgspec.msgpack.encode(self, enc_hook=ext_enc_hook)

    @classmethod
    def convert(cls, obj: Any, **kwargs) -> Self:
        return msgspec.convert(obj, type=cls, dec_hook=ext_dec_hook, **kwargs)

    def to_dict(self) -> dict:
        return msgspec.to_builtins(self, enc_hook=ext_enc_hook)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), cls=ExtendedEncoder, **kwargs)


class FrozenStruct(msgspec.Struct, _Struct, frozen=True): ...
