from __future__ import annotations

from pathlib import Path
from typing import Dict, Any


def get_data_root(config: Dict[str, Any]) -> Path:
    root = config.get("data_root", "/data/colorbook")
    return Path(root).expanduser().resolve()


def ensure_directories(data_root: Path) -> Dict[str, Path]:
    pages_dir = data_root / "pages"
    saved_dir = data_root / "saved"

    pages_dir.mkdir(parents=True, exist_ok=True)
    saved_dir.mkdir(parents=True, exist_ok=True)

    return {
        "pages": pages_dir,
        "saved": saved_dir,
    }
