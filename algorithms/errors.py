"""
errors.py — Error taxonomy
===========================
Every failure the core reports is a GraphStepError.

    GraphStepError
     ├── InvalidParameters   missing / unknown algorithm inputs
     ├── NoSteps             the algorithm produced nothing to show
     │    └── EmptyGraph     … because the graph has no nodes
     ├── CannotStep          step requested past a boundary (caller bug)
     └── AlgorithmError      the algorithm itself blew up (original chained)
"""


class GraphStepError(Exception):
    """Base class for everything the core raises on purpose."""


class InvalidParameters(GraphStepError):
    pass


class NoSteps(GraphStepError):
    pass


class EmptyGraph(NoSteps):
    pass


class CannotStep(GraphStepError):
    """Raised when stepping past either end; check can_step_*() first."""


class AlgorithmError(GraphStepError):
    def __init__(self, algo_key: str, original: BaseException):
        super().__init__(f"Algorithm '{algo_key}' failed: {original}")
        self.algo_key = algo_key
        self.original = original


__all__ = [
    "GraphStepError",
    "InvalidParameters",
    "NoSteps",
    "EmptyGraph",
    "CannotStep",
    "AlgorithmError",
]
