import os, pathlib
import yaml
from pydantic import ValidationError

from .models import RootCfg

DEFAULT_PATH = pathlib.Path(__file__).parent / "ocutils-config.yaml"


class ConfigError(ValueError):
    pass


def load_config(path:str|os.PathLike|None=None) -> RootCfg:
    path = pathlib.Path(path or os.getenv("OC_UTILS_CONFIG") or DEFAULT_PATH)
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return RootCfg(**raw)
    except OSError as e:
        raise ConfigError(f"can't read config {path}: {e}") from e
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        raise ConfigError(f"invalid config {path}: {e}") from e


def resolve_server(cfg:RootCfg, prod:bool=False, server:str|None=None) -> str:
    if not server:
        key = "prod" if prod else "nonprod"
        if key not in cfg.clusters:
            raise ConfigError(f"no '{key}' entry under clusters in config")
        server = cfg.clusters[key]
    if not server.startswith(("https://", "http://")):
        raise ConfigError(f"server URL {server!r} needs a scheme, e.g. https://{server}")
    return server.rstrip("/")
