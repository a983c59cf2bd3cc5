"""International Standard Atmosphere model for small-rocket altitudes.

Provides temperature, pressure, density, speed of sound and gravity as
functions of altitude. The troposphere (0-11 km) uses a linear lapse rate
of -6.5 K/km; above 11 km the model is an isothermal stratosphere at
216.65 K. Density is always derived from the ideal-gas law so it stays
consistent with whatever temperature and pressure the model computes.

Surface overrides follow field-instrument units: temperature in deg C and
pressure in hPa.

Example:
    >>> from flightpath.environment import Atmosphere
    >>>
    >>> atm = Atmosphere()
    >>> result = atm.at_altitude(1000.0)
    >>> print(f"Density: {result.density:.4f} kg/m^3")
    >>>
    >>> field = Atmosphere(surface_temperature=25.0, surface_pressure=1005.0)
    >>> field.temperature(0.0)
    298.15
"""

from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

# =============================================================================
# Constants
# =============================================================================

# Sea level conditions
T0 = 288.15  # Temperature [K]
P0 = 101325.0  # Pressure [Pa]
RHO0 = 1.225  # Density [kg/m^3]

# Physical constants
R_AIR = 287.05287  # Specific gas constant for dry air [J/(kg·K)]
GAMMA_AIR = 1.4  # Ratio of specific heats for air
G0 = 9.80665  # Standard gravity [m/s^2]

# Layer definitions
LAPSE_RATE = -0.0065  # Troposphere lapse rate [K/m]
TROPOPAUSE_ALTITUDE = 11000.0  # [m]
TROPOPAUSE_TEMPERATURE = 216.65  # [K]

# Earth parameters
R_EARTH = 6371000.0  # Mean Earth radius [m]

KELVIN_OFFSET = 273.15
PA_PER_HPA = 100.0


# =============================================================================
# Result Classes
# =============================================================================


@beartype
@dataclass(frozen=True)
class AtmosphereResult:
    """Atmospheric conditions at a given altitude.

    Attributes:
        altitude: Geometric altitude [m]
        temperature: Static temperature [K]
        pressure: Static pressure [Pa]
        density: Air density [kg/m^3]
        speed_of_sound: Speed of sound [m/s]
        gravity: Local gravitational acceleration [m/s^2]
    """
    altitude: float
    temperature: float
    pressure: float
    density: float
    speed_of_sound: float
    gravity: float

    @property
    def temperature_celsius(self) -> float:
        """Static temperature [deg C]."""
        return self.temperature - KELVIN_OFFSET

    @property
    def pressure_hpa(self) -> float:
        """Static pressure [hPa]."""
        return self.pressure / PA_PER_HPA


# =============================================================================
# Atmosphere Model
# =============================================================================


@beartype
class Atmosphere:
    """ISA troposphere plus isothermal stratosphere.

    Args:
        surface_temperature: Optional surface temperature override [deg C].
            Replaces the 288.15 K sea-level base of the lapse-rate line.
        surface_pressure: Optional surface pressure override [hPa].
            Replaces the 101325 Pa base of the barometric formula.

    Per-call overrides passed to the query methods take precedence over the
    instance-level ones.
    """

    def __init__(
        self,
        surface_temperature: float | None = None,
        surface_pressure: float | None = None,
    ) -> None:
        self.surface_temperature = surface_temperature
        self.surface_pressure = surface_pressure

    def _base_temperature(self, surface_temperature: float | None) -> float:
        if surface_temperature is None:
            surface_temperature = self.surface_temperature
        if surface_temperature is None:
            return T0
        return surface_temperature + KELVIN_OFFSET

    def _base_pressure(self, surface_pressure: float | None) -> float:
        if surface_pressure is None:
            surface_pressure = self.surface_pressure
        if surface_pressure is None:
            return P0
        return surface_pressure * PA_PER_HPA

    @beartype
    def temperature(
        self,
        altitude: float,
        surface_temperature: float | None = None,
    ) -> float:
        """Get temperature at altitude.

        Args:
            altitude: Geometric altitude [m]
            surface_temperature: Surface temperature override [deg C]

        Returns:
            Temperature [K]
        """
        if altitude < TROPOPAUSE_ALTITUDE:
            return self._base_temperature(surface_temperature) + LAPSE_RATE * altitude
        return TROPOPAUSE_TEMPERATURE

    @beartype
    def pressure(
        self,
        altitude: float,
        surface_pressure: float | None = None,
    ) -> float:
        """Get pressure at altitude.

        The lapse-rate term is always referenced to the standard 288.15 K
        base; only the base pressure is overridable.

        Args:
            altitude: Geometric altitude [m]
            surface_pressure: Surface pressure override [hPa]

        Returns:
            Pressure [Pa]
        """
        p_base = self._base_pressure(surface_pressure)
        exponent = G0 / (R_AIR * LAPSE_RATE)

        if altitude < TROPOPAUSE_ALTITUDE:
            return float(p_base * (1.0 + LAPSE_RATE * altitude / T0) ** (-exponent))

        p_tropopause = p_base * (1.0 + LAPSE_RATE * TROPOPAUSE_ALTITUDE / T0) ** (-exponent)
        dh = altitude - TROPOPAUSE_ALTITUDE
        return float(p_tropopause * np.exp(-G0 * dh / (R_AIR * TROPOPAUSE_TEMPERATURE)))

    @beartype
    def density(
        self,
        altitude: float,
        surface_temperature: float | None = None,
        surface_pressure: float | None = None,
    ) -> float:
        """Get density from the ideal-gas law, rho = P / (R * T).

        Args:
            altitude: Geometric altitude [m]
            surface_temperature: Surface temperature override [deg C]
            surface_pressure: Surface pressure override [hPa]

        Returns:
            Density [kg/m^3]
        """
        T = self.temperature(altitude, surface_temperature)
        p = self.pressure(altitude, surface_pressure)
        return p / (R_AIR * T)

    @beartype
    def speed_of_sound(
        self,
        altitude: float,
        surface_temperature: float | None = None,
    ) -> float:
        """Get speed of sound at altitude.

        Args:
            altitude: Geometric altitude [m]
            surface_temperature: Surface temperature override [deg C]

        Returns:
            Speed of sound [m/s]
        """
        T = self.temperature(altitude, surface_temperature)
        return float(np.sqrt(GAMMA_AIR * R_AIR * T))

    @staticmethod
    @beartype
    def gravity(altitude: float) -> float:
        """Get gravitational acceleration with inverse-square falloff.

        Args:
            altitude: Geometric altitude [m]

        Returns:
            Gravity [m/s^2]
        """
        return G0 * (R_EARTH / (R_EARTH + altitude)) ** 2

    @beartype
    def at_altitude(
        self,
        altitude: float,
        surface_temperature: float | None = None,
        surface_pressure: float | None = None,
    ) -> AtmosphereResult:
        """Get all atmospheric properties at altitude."""
        return AtmosphereResult(
            altitude=altitude,
            temperature=self.temperature(altitude, surface_temperature),
            pressure=self.pressure(altitude, surface_pressure),
            density=self.density(altitude, surface_temperature, surface_pressure),
            speed_of_sound=self.speed_of_sound(altitude, surface_temperature),
            gravity=self.gravity(altitude),
        )

    @beartype
    def profile(
        self,
        altitudes: NDArray[np.float64] | list[float],
    ) -> dict[str, NDArray[np.float64]]:
        """Get atmospheric properties over a range of altitudes.

        Args:
            altitudes: Array of altitudes [m]

        Returns:
            Dictionary with arrays of temperature, pressure, density,
            speed_of_sound and gravity
        """
        altitudes = np.asarray(altitudes, dtype=np.float64)

        return {
            "altitude": altitudes,
            "temperature": np.array([self.temperature(float(h)) for h in altitudes]),
            "pressure": np.array([self.pressure(float(h)) for h in altitudes]),
            "density": np.array([self.density(float(h)) for h in altitudes]),
            "speed_of_sound": np.array([self.speed_of_sound(float(h)) for h in altitudes]),
            "gravity": np.array([self.gravity(float(h)) for h in altitudes]),
        }


# =============================================================================
# Convenience Functions
# =============================================================================


# Shared standard-day instance; it carries no overrides and no mutable state.
_default_atmosphere = Atmosphere()


@beartype
def get_atmosphere() -> Atmosphere:
    """Get the default standard-day atmosphere instance."""
    return _default_atmosphere


@beartype
def temperature_at_altitude(
    altitude: float,
    surface_temperature: float | None = None,
) -> float:
    """Quick temperature lookup [K]."""
    return _default_atmosphere.temperature(altitude, surface_temperature)


@beartype
def pressure_at_altitude(
    altitude: float,
    surface_pressure: float | None = None,
) -> float:
    """Quick pressure lookup [Pa]."""
    return _default_atmosphere.pressure(altitude, surface_pressure)


@beartype
def density_at_altitude(
    altitude: float,
    surface_temperature: float | None = None,
    surface_pressure: float | None = None,
) -> float:
    """Quick density lookup [kg/m^3]."""
    return _default_atmosphere.density(altitude, surface_temperature, surface_pressure)


@beartype
def speed_of_sound_at_altitude(
    altitude: float,
    surface_temperature: float | None = None,
) -> float:
    """Quick speed-of-sound lookup [m/s]."""
    return _default_atmosphere.speed_of_sound(altitude, surface_temperature)


@beartype
def gravity_at_altitude(altitude: float) -> float:
    """Quick gravity lookup [m/s^2]."""
    return Atmosphere.gravity(altitude)
