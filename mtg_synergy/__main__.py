"""
Run the API server: python -m mtg_synergy
"""

import uvicorn

from mtg_synergy.core.config import settings


def main() -> None:
    uvicorn.run(
        "mtg_synergy.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
