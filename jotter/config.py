import os
from pathlib import Path
from typing import Dict, Optional


def config_dir() -> Path:
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "jotter"


DEFAULT_CONFIG = {
    'notes_file': 'saved-notes.bin',
    'wrap_lines': 'true',
    'log_level': 'INFO',
    'log_file': '',
}


def load_config(path: Optional[Path] = None) -> Dict[str, str]:
    """Defaults overlaid with `key: value` lines from config.cfg, when it exists."""
    cfg = DEFAULT_CONFIG.copy()
    cfg['log_file'] = str(config_dir() / 'jotter.log')
    path = path or config_dir() / 'config.cfg'
    if path.exists():
        for ln in path.read_text(encoding='utf-8').splitlines():
            if ln.lstrip().startswith('#'):
                continue
            if ':' in ln:
                k, v = ln.split(':', 1)
                cfg[k.strip()] = v.strip()
    return cfg


def as_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def notes_path(cfg: Dict[str, str]) -> Path:
    return Path(cfg['notes_file']).expanduser()


def log_path(cfg: Dict[str, str]) -> Path:
    return Path(cfg['log_file']).expanduser()
