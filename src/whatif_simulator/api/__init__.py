"""API layer for the What If Simulator.

This module exports the caller-facing service plus the feedback store and
session id generators it is built from.
"""

from .feedback import (
    CounterSessionIdGenerator,
    FeedbackStore,
    InMemoryFeedbackStore,
    SessionIdGenerator,
    uuid_session_id,
)
from .service import WhatIfAPI, create_default_api

__all__ = [
    # From feedback.py
    "CounterSessionIdGenerator",
    "FeedbackStore",
    "InMemoryFeedbackStore",
    "SessionIdGenerator",
    "uuid_session_id",
    # From service.py
    "WhatIfAPI",
    "create_default_api",
]
