"""What If Simulator.

Turns a free-text "What if...?" scenario into two takes: a serious,
realistic analysis and a fun, creative interpretation.
"""

__version__ = "0.1.0"

from .errors import ErrorType, RetryOptions, WhatIfSimulatorError
from .simulator import PipelineStage, WhatIfSimulator

__all__ = [
    "__version__",
    "ErrorType",
    "PipelineStage",
    "RetryOptions",
    "WhatIfSimulator",
    "WhatIfSimulatorError",
]
