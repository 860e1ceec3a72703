"""Graph kernels, edge-balanced partitioning, queues, a barrier, timing and option parsing."""

__version__ = "0.1.0"

__all__ = [
    "barrier",
    "circular_queue",
    "cliopts",
    "graph",
    "helpformat",
    "optvalues",
    "pagerank",
    "sorting",
    "throughput",
    "timer",
    "triangles",
]