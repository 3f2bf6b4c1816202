"""Simulator API service - the WhatIfAPI registered on the Flask app."""

from flask import current_app

from whatif_simulator.api import WhatIfAPI

EXTENSION_KEY = "whatif_api"


def get_api() -> WhatIfAPI:
    """Get the WhatIfAPI registered on the current app."""
    return current_app.extensions[EXTENSION_KEY]
