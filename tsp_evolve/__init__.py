"""
Genetic-algorithm TSP solver: tournament selection, ordered crossover and swap
mutation with single-elite generational replacement.
"""

__all__ = [
    "core",
    "data",
    "evaluation",
    "evolutionary",
    "operators",
]
