from .base import (
    City,
    DegenerateRouteError,
    EmptyPopulationError,
    InvariantError,
    Tour,
    tour_length,
)
from .population import Population
from .route import Route

__all__ = [
    "City",
    "Tour",
    "tour_length",
    "InvariantError",
    "EmptyPopulationError",
    "DegenerateRouteError",
    "Route",
    "Population",
]
