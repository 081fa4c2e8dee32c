class SimulationError(Exception):
    """Base class for all errors raised by the MPM solvers."""


class ConfigurationError(SimulationError, ValueError):
    """A solver, grid or parameter record was constructed with invalid values."""


class InvalidArgumentError(SimulationError, ValueError):
    """A call received an argument outside of its valid range."""


class HandoffError(SimulationError, RuntimeError):
    """The particle and grid buffers could not be moved to a new solver."""


class SolverReleasedError(HandoffError):
    """The solver has handed its buffers to another solver and can't be used anymore."""


class TickFailedError(SimulationError, RuntimeError):
    """A tick could not be completed, the particle state has been rolled back."""
