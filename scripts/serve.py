from __future__ import annotations

import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "absence_tracker"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from absence_tracker.main import create_app


def main() -> None:
    app = create_app()
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "3001")))


if __name__ == "__main__":
    main()
