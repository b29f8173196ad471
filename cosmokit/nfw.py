"""Properties of the Navarro, Frenk & White (NFW) halo profile.

Lengths are in Mpc, masses in solar masses and velocities in km/s. Nothing
here depends on cosmology; the concentration is treated as a free parameter.
"""

from __future__ import annotations

import math

from cosmokit.numerics import brent_root

__all__ = [
    "GRAV",
    "LIGHTSPEED",
    "v200",
    "vmax",
    "circular_velocity",
    "enclosed_mass",
    "central_overdensity",
    "concentration_from_vmax",
    "density",
    "g_func",
    "halo_size",
    "match_nfw",
    "moster_stellar_mass_fraction",
]

GRAV = 4.7788e-20
"""Newton's constant over c^2 in Mpc / Msun."""

LIGHTSPEED = 2.99792458e5
"""Speed of light in km/s."""

_VMAX_FACTOR = 0.216
_MIN_CONCENTRATION = 2.175
_MAX_CONCENTRATION = 1000.0


def g_func(x: float) -> float:
    """The NFW mass function ``ln(1 + x) - x / (1 + x)``."""
    return math.log(1 + x) - x / (1 + x)


def v200(m200: float, r200: float) -> float:
    """Circular velocity at R200."""
    return LIGHTSPEED * math.sqrt(GRAV * m200 / r200)


def vmax(cons: float, m200: float, r200: float) -> float:
    """Maximum circular velocity of a halo with concentration ``cons`` = R200/Rs."""
    return math.sqrt(_VMAX_FACTOR * cons / g_func(cons)) * v200(m200, r200)


def circular_velocity(x: float, cons: float, m200: float, r200: float) -> float:
    """Circular velocity at radius ``x`` = r/R200."""
    return math.sqrt(g_func(cons * x) / g_func(cons) / x) * v200(m200, r200)


def enclosed_mass(x: float, cons: float, m200: float) -> float:
    """Mass enclosed within radius ``x`` = r/R200."""
    return m200 * g_func(cons * x) / g_func(cons)


def central_overdensity(cons: float) -> float:
    """Characteristic over-density of the halo."""
    return 200 * cons ** 3 / 3 / g_func(cons)


def concentration_from_vmax(v_max: float, m200: float, r200: float) -> float:
    """Concentration of the NFW halo that has maximum circular velocity ``v_max``.

    Raises ValueError when the velocity implies a concentration outside
    [2.175, 1000].
    """
    vg = v_max / v200(m200, r200)
    if vg < 1:
        raise ValueError("Vmax is too small for an NFW halo of this mass and radius")
    if v_max > vmax(_MAX_CONCENTRATION, m200, r200):
        raise ValueError("Vmax is too large: the concentration would be over 1000")
    if v_max < vmax(_MIN_CONCENTRATION, m200, r200):
        raise ValueError("Vmax is too small: the concentration would be under 2.175")

    def residual(cons: float) -> float:
        return vg * vg - _VMAX_FACTOR * cons / g_func(cons)

    return brent_root(residual, _MIN_CONCENTRATION, _MAX_CONCENTRATION, 1.0e-8)


def density(cons: float, x: float) -> float:
    """Density at radius ``x`` in units of the critical density; 0 for ``x <= 0``."""
    if x <= 0:
        return 0.0
    return central_overdensity(cons) / x / (1 + x) ** 2


def halo_size(cons: float, v_max: float, mass: float) -> float:
    """Radius of a halo of the given concentration, maximum velocity and mass."""
    return GRAV * mass * (_VMAX_FACTOR * LIGHTSPEED * cons / v_max) ** 2


def match_nfw(v_max: float, r_half: float, mass: float) -> tuple[float, float]:
    """Concentration and radius of the NFW halo with the given Vmax, half-mass radius and mass.

    The radius is not necessarily R200 or the virial radius. A non-positive mass
    gives ``(0.0, 0.0)``. Raises ValueError for inconsistent inputs.
    """
    if mass <= 0.0:
        return 0.0, 0.0
    if v_max <= 0.0:
        raise ValueError("Vmax must be positive")
    if r_half <= 0.0:
        raise ValueError("the half mass radius must be positive")

    def residual(cons: float) -> float:
        return 2 * g_func(r_half * cons / halo_size(cons, v_max, mass)) - g_func(cons)

    if residual(1.0e-4) * residual(1.0e4) > 0.0:
        raise ValueError("Vmax, R_half and mass are inconsistent")

    cons = brent_root(residual, 1.0e-5, 1.0e4, 1.0e-8)
    size = halo_size(cons, v_max, mass)
    if not size > r_half:
        raise ValueError("the matched halo is smaller than its half mass radius")
    return cons, size


def moster_stellar_mass_fraction(m_total: float) -> float:
    """Fraction of a halo's total mass (solar masses) in stars, after Moster et al. 2010."""
    mo, m1, gam1, gam2, be = 7.3113e10, 2.8575e10, 7.17, 0.201, 0.557
    u = m_total / m1
    return mo * u ** gam1 / (1 + u ** be) ** ((gam1 - gam2) / be) / m_total