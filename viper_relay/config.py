"""Runtime settings read from the environment."""

from __future__ import annotations

import os

from . import __version__

# HTTP provider
REQUEST_TIMEOUT_S = float(os.getenv("VIPER_REQUEST_TIMEOUT_S", "10.0"))
VERIFY_TLS = os.getenv("VIPER_VERIFY_TLS", "1") != "0"
USER_AGENT = os.getenv("VIPER_USER_AGENT", f"viper-relay/{__version__}")

CLIENT_RELAY_ROUTE = "/v1/client/relay"
