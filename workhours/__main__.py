"""Run the service with ``python -m workhours``."""
from __future__ import annotations

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "workhours.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
