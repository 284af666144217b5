import copy, logging
from pathlib import Path

import yaml

from structforge.paths import KNOWN_FILES

DEFAULT_CFG = {
    "parser": {
        # added to paths.KNOWN_FILES
        "extra_known_files": [],
    },
    "scaffold": {
        "gitkeep": False,
        "verbose": False,
    },
    "logging": {
        "level": "INFO",
    },
    "server": {
        "root_dir": ".",
    },
}

def load_cfg(path=None):
    """Return DEFAULT_CFG, overridden section by section from a YAML file."""
    cfg = copy.deepcopy(DEFAULT_CFG)
    if path is None:
        return cfg
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {p}")
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(cfg.get(section), dict):
            cfg[section].update(values)
        else:
            cfg[section] = values
    return cfg

def known_files(cfg):
    extra = cfg.get("parser", {}).get("extra_known_files") or ()
    return KNOWN_FILES | frozenset(str(n) for n in extra)

def log(name="structforge", level=None):
    lg = logging.getLogger(name)
    if not lg.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        lg.addHandler(h)
    lg.setLevel(level or logging.INFO)
    return lg
