from typing import Optional

class TrafficNetworkError(Exception):
    """Base exception for all traffic network errors."""
    pass

# Structural

class DuplicateIdError(TrafficNetworkError):
    """Raised when an intersection id is already taken."""
    pass

class InvalidIdError(TrafficNetworkError):
    """Raised when an intersection id is blank or contains the field separator."""
    pass

class IntersectionNotFoundError(TrafficNetworkError):
    """Raised when no intersection has the requested id."""
    pass

class RouteNotFoundError(TrafficNetworkError):
    """Raised when no route connects the requested pair of intersections."""
    pass

class RouteExistsError(TrafficNetworkError):
    """Raised when a route between the same ordered pair already exists."""
    pass

# Arguments

class InvalidArgumentError(TrafficNetworkError, ValueError):
    """Raised for negative speeds, too-short durations or bad yellow times."""
    pass

class InvalidOrderError(TrafficNetworkError):
    """Raised when a light order is empty or not a permutation of the incoming routes."""
    pass

class NoSpeedSignError(TrafficNetworkError):
    """Raised when setting the speed limit of a route without a speed sign."""
    pass

class NoTrafficLightsError(TrafficNetworkError):
    """Raised when changing lights on an intersection that has none."""
    pass

# Sensors

class DuplicateSensorError(TrafficNetworkError):
    """Raised when a route already has a sensor of the same kind."""
    pass

# Format / config

class InvalidNetworkFormatError(TrafficNetworkError):
    """Raised when a network file is malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)

class ConfigurationError(TrafficNetworkError):
    """Raised when configuration is invalid."""
    pass
