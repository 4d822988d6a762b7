"""
Append-only submission log.

One compact JSON object per line (JSON Lines), so every record can be
parsed on its own. Appends are serialized in-process and each record goes
out in a single write.
"""

import asyncio
import json
from pathlib import Path


REQUIRED_FIELDS = ("url", "websiteName")


def missing_fields(record) -> list[str]:
    if not isinstance(record, dict):
        return list(REQUIRED_FIELDS)
    return [f for f in REQUIRED_FIELDS if not record.get(f)]


class SubmissionStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    def _write_line(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line)

    async def append(self, record: dict) -> None:
        line = json.dumps(record, ensure_ascii=False) + "\n"
        async with self.lock:
            await asyncio.to_thread(self._write_line, line)
        print(f"[submit] Stored submission for {record.get('url')}")
