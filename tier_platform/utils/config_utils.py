import os
import yaml
from dataclasses import _MISSING_TYPE, Field
from enum import Enum
from typing import Any, Dict, TypeVar, _GenericAlias

import logging
logger = logging.getLogger(__name__)


class ConfigLoader(yaml.SafeLoader):
    # https://stackoverflow.com/questions/528281/how-can-i-include-a-yaml-file-inside-another
    def __init__(self, stream):
        self._root = os.path.split(getattr(stream, "name", ""))[0]
        super(ConfigLoader, self).__init__(stream)

    def include(self, node):
        filename = os.path.join(self._root, self.construct_scalar(node))
        with open(filename, "r") as f:
            ret = yaml.load(f, ConfigLoader)
        assert ret is not None, "included file is empty? file: %s" % filename
        return ret

    def addr_range(self, node):
        # !addr_range [A, 0, 50] => [A0, A1, ..., A49]
        args = self.construct_sequence(node)
        if len(args) != 3:
            raise yaml.constructor.ConstructorError(
                None, None, f"!addr_range expects [prefix, start, stop], got {args}", node.start_mark)
        prefix, start, stop = args
        return [f"{prefix}{i}" for i in range(int(start), int(stop))]


ConfigLoader.add_constructor("!include", ConfigLoader.include)
ConfigLoader.add_constructor("!addr_range", ConfigLoader.addr_range)


T = TypeVar("T")

# values must already carry the declared type, no coercion
_SCALAR_TYPES = (int, float, bool, str)


def dict_to_dataclass(d: Dict[str, Any], cls: T, *, restrict_mode=True) -> T:
    if not hasattr(cls, "__dataclass_fields__"):
        if isinstance(cls, _GenericAlias) and cls.__origin__ is list:
            inner_cls = cls.__args__[0]
            return [dict_to_dataclass(x, inner_cls, restrict_mode=restrict_mode) for x in d]
        elif isinstance(cls, _GenericAlias) and cls.__origin__ is dict:
            key_type = cls.__args__[0]
            val_type = cls.__args__[1]
            return {
                key_type(k): dict_to_dataclass(v, val_type, restrict_mode=restrict_mode)
                for k, v in d.items()
            }
        if cls in _SCALAR_TYPES and type(d) is not cls:
            raise ValueError(f"expected {cls.__name__}, got {d!r}")
        return cls(d)

    if not isinstance(d, dict):
        raise ValueError(f"{cls.__name__} expects a mapping, got {d!r}")

    fields = cls.__dataclass_fields__
    unknown = set(d) - set(fields)
    if unknown:
        logger.warning("%s: ignoring unknown keys %s", cls.__name__, sorted(unknown))

    kwargs = {}
    for field_name, field_type in fields.items():
        if not isinstance(field_type, Field):
            continue
        field_value = d.get(field_name)
        if field_value is not None:
            if field_type.type is None or type(field_value) == field_type.type:
                kwargs[field_name] = field_value
            elif field_type.type in _SCALAR_TYPES:
                raise ValueError(
                    f"{cls.__name__}.{field_name} expects {field_type.type.__name__}, got {field_value!r}")
            else:
                kwargs[field_name] = dict_to_dataclass(
                    field_value, field_type.type, restrict_mode=restrict_mode)
        else:
            if not isinstance(field_type.default_factory, _MISSING_TYPE):
                kwargs[field_name] = field_type.default_factory()
            elif not isinstance(field_type.default, _MISSING_TYPE):
                kwargs[field_name] = field_type.default
            else:
                if restrict_mode:
                    raise ValueError(
                        f"required {cls.__name__}.{field_name} is not provided")
                kwargs[field_name] = None
    return cls(**kwargs)


def load_config(config_path: str, cls: T) -> T:
    with open(config_path) as f:
        data = yaml.load(f, ConfigLoader)
    if data is None:
        raise ValueError(f"config file is empty: {config_path}")
    return dict_to_dataclass(data, cls)


class BaseEnum(Enum):
    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        value = value.lower()
        for member in cls:
            if member.name.lower() == value:
                return member
        return None

    def __repr__(self):
        return self.name
