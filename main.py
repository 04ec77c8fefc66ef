"""
Building Materials Delivery Pricing Service
===========================================
Serves delivery charges, warehouse assignment and price quotes over HTTP.

Run with ``python main.py`` (bind address from ``API_HOST`` / ``API_PORT``)
or ``uvicorn main:app``.
"""

import uvicorn

from delivery_pricing.api.app import create_app
from delivery_pricing.config import settings

app = create_app()


def run() -> None:
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
