from __future__ import annotations

import json
import pathlib
import time
from typing import Any, Dict, Optional

# Default path of the render log
LOG_PATH = pathlib.Path("logs") / "renders.log"


def log_render(entry: Dict[str, Any], *, log_file: Optional[pathlib.Path] = LOG_PATH) -> None:
    """Append a record of one render to the log file.

    Each line is a JSON object with a `ts` key (ISO timestamp, UTC) followed
    by the fields of `entry`, typically:
      - rule, cells, steps, start_type, seed: the render parameters
      - rows: image height
      - bytes: encoded image size
      - source: "web" or "cli"

    A `log_file` of None disables logging.
    """
    if log_file is None:
        return
    log_file = pathlib.Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    record = {"ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())}
    record.update(entry)
    with log_file.open("a", encoding="utf-8") as fp:
        fp.write(json.dumps(record, ensure_ascii=False) + "\n")
