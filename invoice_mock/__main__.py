"""Module entrypoint for the invoice mock.

Environment:
  MOCK_HOST, MOCK_PORT (or PORT), MOCK_LOG_LEVEL, MOCK_FIXTURES_DIR, MOCK_LOCALE
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from .config import MockConfig
from .server import create_app


def main() -> None:
    config = MockConfig.from_env()

    logging.basicConfig(
        level=config.logging_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not (config.mocks_dir / "default.json").is_file():
        print(f"[mock] warning: {config.mocks_dir}/default.json is missing", file=sys.stderr)
    print(f"[mock] serving fixtures from {config.mocks_dir}", file=sys.stderr)

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level,
        # Hosted mocks usually sit behind a reverse proxy.
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
