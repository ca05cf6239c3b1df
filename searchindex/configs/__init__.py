"""Configuration for searchindex"""

import pathlib

from dynaconf import Dynaconf, Validator

# Validators for searchindex settings.
_validators = [
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator("logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.can_propagate", is_type_of=bool),
    Validator("elasticsearch.host", is_type_of=str, must_exist=True, len_min=1),
    Validator("elasticsearch.index_name", is_type_of=str, must_exist=True, len_min=1),
    Validator(
        "elasticsearch.request_timeout_sec", is_type_of=(int, float), must_exist=True, gt=0
    ),
    Validator("elasticsearch.connect_timeout_sec", is_type_of=(int, float), gt=0),
    Validator("elasticsearch.pool_timeout_sec", is_type_of=(int, float), gt=0),
    Validator("elasticsearch.max_connections", is_type_of=int, gte=1),
]

# `root_path` = The directory holding the TOML files below.
# `envvar_prefix` = Export envvars with `export SEARCHINDEX_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing`.
# `env_switcher` = Switch environments by `export SEARCHINDEX_ENV=production`.
#   Default: `development`.
# `merge_enabled` = Merge environment tables into the default ones instead of replacing them.
# `validators` = Define validators for searchindex settings.

settings = Dynaconf(
    root_path=str(pathlib.Path(__file__).parent),
    envvar_prefix="SEARCHINDEX",
    settings_files=[
        "default.toml",
        "development.toml",
        "production.toml",
        "testing.toml",
    ],
    environments=True,
    env_switcher="SEARCHINDEX_ENV",
    merge_enabled=True,
    validators=_validators,
)
