"""Exception hierarchy for flightpath.

Numerical non-convergence is deliberately absent here: an integrator that
exhausts its iteration cap returns the trajectory it has accumulated and
flags it as not converged.
"""


class FlightpathError(Exception):
    """Base class for all flightpath errors."""


class ConfigurationError(FlightpathError, ValueError):
    """Raised when simulation inputs are physically invalid.

    Checked before any integration starts so that degenerate inputs
    (zero mass, zero burn time, zero reference area) fail fast instead of
    propagating NaN/inf through the trajectory.
    """


class WeatherFetchError(FlightpathError):
    """Raised by a weather source that could not produce WeatherData.

    The message is meant for humans, e.g. "weather request failed: HTTP 503".
    """
