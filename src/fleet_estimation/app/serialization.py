from __future__ import annotations

from datetime import datetime
import json
from pathlib import Path
from typing import Any

import msgpack
import numpy as np


def _default(obj: Any):
    if isinstance(obj, np.datetime64):
        return str(np.datetime_as_string(obj, unit="s"))
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    raise TypeError(f"Object of type {type(obj)!r} is not serialisable")


class SerializableResult:
    """Mixin adding MessagePack and JSON export on top of ``to_dict``."""

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_msgpack(self) -> bytes:
        """Serialize to MessagePack binary format."""
        return msgpack.packb(self.to_dict(), use_bin_type=True, default=_default)

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=_default)

    def dump_json(self, path: Path | str, *, indent: int = 2) -> None:
        """Write the result to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            fh.write(self.to_json(indent=indent))
