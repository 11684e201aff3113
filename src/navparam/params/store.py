"""Key/value parameter stores consumed by the typed accessors

Any backend that offers has_key/get_param/set_param can be handed to the
accessors. Keys use '/' or '.' as namespace separators and a leading '/' is
ignored, so '/gnss/rate' and 'gnss.rate' name the same parameter.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Protocol, Tuple, Union, runtime_checkable

import yaml
from omegaconf import DictConfig, ListConfig, OmegaConf

from ..core.errors import TypeMismatchError

logger = logging.getLogger(__name__)

_MISSING = object()

_INT_TAG = "tag:yaml.org,2002:int"


class DecimalIntLoader(yaml.SafeLoader):
    """SafeLoader that reads integers as plain decimal only

    YAML 1.1 would turn '010' into 8 and '1:30' into 90; here the former is 10
    and the latter stays a string.
    """


DecimalIntLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DecimalIntLoader.add_implicit_resolver(
    _INT_TAG, re.compile(r"^[-+]?[0-9]+$"), list("-+0123456789")
)
DecimalIntLoader.add_constructor(
    _INT_TAG, lambda loader, node: int(loader.construct_scalar(node), 10)
)


@runtime_checkable
class ParameterStore(Protocol):
    """Minimal interface of a configuration store"""

    def has_key(self, key: str) -> bool:
        ...

    def get_param(self, key: str) -> Tuple[Any, bool]:
        """Return (value, True) if the key exists, else (None, False)"""
        ...

    def set_param(self, key: str, value: Any) -> None:
        ...


def split_key(key: str) -> List[str]:
    """Split a parameter key into its namespace components"""
    parts = [p for p in key.strip("/").replace(".", "/").split("/") if p]
    if not parts:
        raise ValueError(f"Invalid parameter key: {key!r}")
    return parts


class DictParameterStore:
    """In-memory store over nested dictionaries"""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = data if data is not None else {}

    def _lookup(self, key: str) -> Any:
        node: Any = self.data
        for part in split_key(key):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def has_key(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def get_param(self, key: str) -> Tuple[Any, bool]:
        value = self._lookup(key)
        if value is _MISSING:
            return None, False
        return value, True

    def set_param(self, key: str, value: Any) -> None:
        *parents, leaf = split_key(key)
        node = self.data
        for part in parents:
            if part not in node:
                node[part] = {}
            elif not isinstance(node[part], dict):
                raise TypeMismatchError(
                    f"Cannot set '{key}': parent '{part}' holds a {type(node[part]).__name__}, not a namespace",
                    name=key,
                    expected="namespace",
                    value=node[part],
                )
            node = node[part]
        node[leaf] = value


class OmegaConfParameterStore:
    """Store backed by an OmegaConf DictConfig, typically loaded from YAML"""

    def __init__(self, cfg: Optional[DictConfig] = None):
        self.cfg = cfg if cfg is not None else OmegaConf.create({})

    @classmethod
    def from_yaml(cls, *paths: Union[str, Path]) -> "OmegaConfParameterStore":
        """Load YAML files and deep merge them, later files overriding earlier ones"""
        configs = [OmegaConf.load(path) for path in paths]
        for path in paths:
            logger.debug(f"Loaded parameter file: {path}")
        if not configs:
            return cls()
        return cls(OmegaConf.merge(*configs))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OmegaConfParameterStore":
        return cls(OmegaConf.create(data))

    @staticmethod
    def _dotted(key: str) -> str:
        return ".".join(split_key(key))

    def has_key(self, key: str) -> bool:
        return OmegaConf.select(self.cfg, self._dotted(key), default=_MISSING) is not _MISSING

    def get_param(self, key: str) -> Tuple[Any, bool]:
        value = OmegaConf.select(self.cfg, self._dotted(key), default=_MISSING)
        if value is _MISSING:
            return None, False
        if isinstance(value, (DictConfig, ListConfig)):
            value = OmegaConf.to_container(value, resolve=True)
        return value, True

    def set_param(self, key: str, value: Any) -> None:
        OmegaConf.update(self.cfg, self._dotted(key), value, merge=False, force_add=True)


class EnvParameterStore:
    """Store over environment variables with YAML-encoded values

    The key 'gnss/rate' maps to NAVPARAM_GNSS_RATE for the default prefix.
    """

    def __init__(self, prefix: str = "NAVPARAM_", environ: Optional[MutableMapping[str, str]] = None):
        self.prefix = prefix
        self.environ = environ if environ is not None else os.environ

    def variable_name(self, key: str) -> str:
        parts = [p.upper().replace("-", "_") for p in split_key(key)]
        return self.prefix + "_".join(parts)

    def has_key(self, key: str) -> bool:
        return self.variable_name(key) in self.environ

    def get_param(self, key: str) -> Tuple[Any, bool]:
        raw = self.environ.get(self.variable_name(key))
        if raw is None:
            return None, False
        try:
            return yaml.load(raw, Loader=DecimalIntLoader), True
        except yaml.YAMLError:
            logger.warning(f"Could not decode {self.variable_name(key)} as YAML, using raw string")
            return raw, True

    def set_param(self, key: str, value: Any) -> None:
        text = yaml.safe_dump(value, default_flow_style=True)
        if text.endswith("...\n"):
            text = text[: -len("...\n")]
        self.environ[self.variable_name(key)] = text.strip()
