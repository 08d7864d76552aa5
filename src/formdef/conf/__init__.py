import configparser
import json
import logging
import os
import re

from ast import literal_eval
from types import ModuleType
from typing import Any, Callable, Dict, Union

from . import sysdefaults


def env(name: str, defval: Any, coercer: Callable[[Any], Any] = None):
    ''' Extract environment value to use as configuration variable
    '''
    value = os.environ.get(name, defval)
    return coercer(value) if callable(coercer) else value


FORMDEF_SYSTEM_DEFAULTS = env("FORMDEF_SYSTEM_DEFAULTS", "sysdefaults")
FORMDEF_CONFIG_FILES = env("FORMDEF_CONFIG_FILE", "base.ini|config.ini").split('|')
DEBUG_ALL_CONFIG_VALUE = "#ALL"


def __module_config__():  # noqa: C901
    RX_INVALID_OPTION = re.compile(r"[^A-Za-z\d_]+")

    __parser__ = configparser.ConfigParser()
    __parser__.optionxform = lambda s: RX_INVALID_OPTION.sub("_", s.strip()).upper()

    __config__: Dict[str, "ModuleConfig"] = {}

    class ModuleConfig(object):
        def __init__(self, module_name: str, *defaults):
            if module_name in __config__:
                raise RuntimeError(f"Module [{module_name}] already configured.")

            # The section may also be created when a config file is read.
            if not __parser__.has_section(module_name):
                __parser__.add_section(module_name)

            self.__name__ = module_name
            values: Dict[str, Any] = {}
            vdebug: Dict[str, Any] = {}

            def getter(section, key, value):
                # NOTE: bool is a subclass of int,
                # therefore it must be checked before int.
                if isinstance(value, bool):
                    return __parser__.getboolean(section, key)
                if isinstance(value, int):
                    return __parser__.getint(section, key)
                if isinstance(value, float):
                    return __parser__.getfloat(section, key)
                if isinstance(value, (dict, list, tuple)):
                    return json.loads(__parser__.get(section, key))
                if isinstance(value, (str, type(None))):
                    return __parser__.get(section, key)

                raise ValueError(f"Not supported config value type [{type(value)}].")

            def load_config(conf):
                if conf is None:
                    return

                if isinstance(conf, ModuleConfig):
                    _iter = conf.items()
                    _trace = conf.__vdebug__
                else:
                    _iter = conf.__dict__.items()
                    _trace = None

                for k, v in _iter:
                    if not k.isupper() or k in values:
                        continue

                    try:
                        values[k] = getter(module_name, k, v)
                        if isinstance(values[k], str):
                            try:
                                parsed = literal_eval(values[k])
                            except (ValueError, SyntaxError):
                                parsed = None

                            if isinstance(parsed, (list, tuple)):
                                values[k] = parsed
                        vdebug[k] = (values[k], type(values[k]), FORMDEF_CONFIG_FILES)
                    except configparser.NoOptionError:
                        values[k] = v
                        vdebug[k] = _trace[k] if _trace else (v, type(v), getattr(conf, '__name__', '<unknown-name>'))

            for conf in defaults + (sysdefaults,):
                load_config(conf)

            if sysdefaults.DEBUG_MODULE_CONFIG in (DEBUG_ALL_CONFIG_VALUE, module_name):
                logging.debug("=== START MODULE CONFIG [%s] ===", module_name)
                for k, v in vdebug.items():
                    logging.debug(" - [%s] %s ::= %s", k, v[0], v[1:])
                logging.debug("=/=  END MODULE CONFIG [%s]  =/=", module_name)

            self.__values__ = values
            self.__vdebug__ = vdebug

        def __getattr__(self, name):
            try:
                return self.__values__[name]
            except KeyError:
                raise AttributeError(name) from None

        def __getitem__(self, name):
            return self.__values__[name]

        def get(self, name, default=None):
            return self.__values__.get(name, default)

        def items(self):
            ''' NOTE: only UPPERCASE keys defined in the defaults are listed '''
            yield from self.__values__.items()

        def keys(self):
            yield from self.__values__.keys()

        def values(self):
            yield from self.__values__.values()

        def as_dict(self):
            return self.__values__.copy()

    def get_config(config_key: str, *defaults: Union[ModuleType, ModuleConfig]) -> ModuleConfig:
        if config_key not in __config__:
            __config__[config_key] = ModuleConfig(config_key, *defaults)

        return __config__[config_key]

    # Missing config files are ignored, every existing one is read in order.
    __parser__.read(FORMDEF_CONFIG_FILES)
    default_config = get_config(FORMDEF_SYSTEM_DEFAULTS, sysdefaults)
    return ModuleConfig, get_config, default_config


ModuleConfig, getConfig, default_config = __module_config__()
