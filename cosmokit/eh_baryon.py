"""Eisenstein & Hu (1997) transfer function for CDM + baryon universes.

The fit includes the baryon acoustic oscillations but no massive neutrinos.
All internal length scales are in Mpc, not h^-1 Mpc.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["COBE_TCMB", "TransferPieces", "BaryonTransfer"]

COBE_TCMB = 2.728
"""CMB temperature in Kelvin measured by COBE FIRAS."""


@dataclass(frozen=True)
class TransferPieces:
    """The full transfer function and its baryon and CDM contributions."""

    full: float
    baryon: float
    cdm: float


class BaryonTransfer:
    """Scalar parameters of the fitting formula for one cosmology.

    ``omega0hh`` is the density of CDM and baryons in units of the critical
    density times h^2, ``f_baryon`` the baryon fraction and ``tcmb`` the CMB
    temperature in Kelvin; a non-positive ``tcmb`` selects the COBE value.
    """

    def __init__(self, omega0hh: float, f_baryon: float, tcmb: float = COBE_TCMB) -> None:
        if f_baryon <= 0.0 or omega0hh <= 0.0:
            raise ValueError("omega0hh and f_baryon must be positive")
        if tcmb <= 0.0:
            tcmb = COBE_TCMB

        self.omhh = omhh = omega0hh
        self.obhh = obhh = omhh * f_baryon
        self.f_baryon = f_baryon
        self.theta_cmb = theta_cmb = tcmb / 2.7

        self.z_equality = 2.50e4 * omhh / theta_cmb ** 4  # really 1 + z
        self.k_equality = 0.0746 * omhh / theta_cmb ** 2

        z_drag_b1 = 0.313 * omhh ** -0.419 * (1 + 0.607 * omhh ** 0.674)
        z_drag_b2 = 0.238 * omhh ** 0.223
        self.z_drag = (
            1291 * omhh ** 0.251 / (1 + 0.659 * omhh ** 0.828)
            * (1 + z_drag_b1 * obhh ** z_drag_b2)
        )

        self.r_drag = 31.5 * obhh / theta_cmb ** 4 * (1000 / (1 + self.z_drag))
        self.r_equality = 31.5 * obhh / theta_cmb ** 4 * (1000 / self.z_equality)

        self.sound_horizon = (
            2.0 / 3.0 / self.k_equality * math.sqrt(6.0 / self.r_equality)
            * math.log(
                (math.sqrt(1 + self.r_drag) + math.sqrt(self.r_drag + self.r_equality))
                / (1 + math.sqrt(self.r_equality))
            )
        )

        self.k_silk = 1.6 * obhh ** 0.52 * omhh ** 0.73 * (1 + (10.4 * omhh) ** -0.95)

        alpha_c_a1 = (46.9 * omhh) ** 0.670 * (1 + (32.1 * omhh) ** -0.532)
        alpha_c_a2 = (12.0 * omhh) ** 0.424 * (1 + (45.0 * omhh) ** -0.582)
        self.alpha_c = alpha_c_a1 ** -f_baryon * alpha_c_a2 ** -(f_baryon ** 3)

        beta_c_b1 = 0.944 / (1 + (458 * omhh) ** -0.708)
        beta_c_b2 = (0.395 * omhh) ** -0.0266
        self.beta_c = 1.0 / (1 + beta_c_b1 * ((1 - f_baryon) ** beta_c_b2 - 1))

        y = self.z_equality / (1 + self.z_drag)
        root = math.sqrt(1 + y)
        alpha_b_g = y * (-6.0 * root + (2.0 + 3.0 * y) * math.log((root + 1) / (root - 1)))
        self.alpha_b = (
            2.07 * self.k_equality * self.sound_horizon
            * (1 + self.r_drag) ** -0.75 * alpha_b_g
        )

        self.beta_node = 8.41 * omhh ** 0.435
        self.beta_b = 0.5 + f_baryon + (3.0 - 2.0 * f_baryon) * math.sqrt((17.2 * omhh) ** 2 + 1)

        self.k_peak = 2.5 * 3.14159 * (1 + 0.217 * omhh) / self.sound_horizon
        self.sound_horizon_fit = 44.5 * math.log(9.83 / omhh) / math.sqrt(1 + 10.0 * obhh ** 0.75)

        self.alpha_gamma = (
            1 - 0.328 * math.log(431.0 * omhh) * f_baryon
            + 0.38 * math.log(22.3 * omhh) * f_baryon ** 2
        )

    def transfer(self, k: float) -> TransferPieces:
        """Transfer function at wavenumber ``k`` in Mpc^-1; negative ``k`` counts as positive."""
        k = abs(k)
        if k == 0.0:
            return TransferPieces(1.0, 1.0, 1.0)

        q = k / 13.41 / self.k_equality
        xx = k * self.sound_horizon

        ln_beta = math.log(2.718282 + 1.8 * self.beta_c * q)
        ln_nobeta = math.log(2.718282 + 1.8 * q)
        c_alpha = 14.2 / self.alpha_c + 386.0 / (1 + 69.9 * q ** 1.08)
        c_noalpha = 14.2 + 386.0 / (1 + 69.9 * q ** 1.08)

        f = 1.0 / (1.0 + (xx / 5.4) ** 4)
        t_c = (
            f * ln_beta / (ln_beta + c_noalpha * q * q)
            + (1 - f) * ln_beta / (ln_beta + c_alpha * q * q)
        )

        s_tilde = self.sound_horizon * (1 + (self.beta_node / xx) ** 3) ** (-1.0 / 3.0)
        xx_tilde = k * s_tilde

        t_b_t0 = ln_nobeta / (ln_nobeta + c_noalpha * q * q)
        t_b = math.sin(xx_tilde) / xx_tilde * (
            t_b_t0 / (1 + (xx / 5.2) ** 2)
            + self.alpha_b / (1 + (self.beta_b / xx) ** 3) * math.exp(-((k / self.k_silk) ** 1.4))
        )

        f_baryon = self.obhh / self.omhh
        full = f_baryon * t_b + (1 - f_baryon) * t_c
        return TransferPieces(full, t_b, t_c)

    def full(self, k: float) -> float:
        """The full transfer function at ``k`` in Mpc^-1."""
        return self.transfer(k).full