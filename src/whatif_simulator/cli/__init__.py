"""Terminal interface for the What If Simulator."""

from .app import WhatIfApp, main

__all__ = ["WhatIfApp", "main"]
