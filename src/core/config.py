from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

DEFAULT_APP_ID = "com.renamed.app"


@dataclass(frozen=True)
class AppConfig:
    app_id: str = DEFAULT_APP_ID
    # Base per-user data directory; None resolves the OS default at connect time
    data_dir: Optional[Path] = None
    log_level: int = logging.INFO

    def with_data_dir(self, data_dir: Path | str) -> "AppConfig":
        return replace(self, data_dir=Path(data_dir))


__all__ = ["AppConfig", "DEFAULT_APP_ID"]
