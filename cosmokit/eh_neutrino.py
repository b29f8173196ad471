"""Eisenstein & Hu fitting formula for CDM + baryon + massive neutrino cosmologies.

The fit includes free-streaming suppression by massive neutrinos but no baryon
acoustic oscillations. All internal length scales are in Mpc, not h^-1 Mpc.
The small-scale free-streaming correction uses the modified coefficients of
Kiakotou et al. (2008).
"""

from __future__ import annotations

import math
import warnings

__all__ = ["NeutrinoTransfer"]

_TRACE_DENSITY = 1e-5
_THETA_CMB = 2.728 / 2.7  # T_cmb = 2.728 K in units of 2.7 K
_LARGE_REDSHIFT = 99.0


class NeutrinoTransfer:
    """Scalar parameters of the mixed dark matter fit for one cosmology.

    Densities are in units of the critical density; ``omega_matter`` includes
    CDM, baryons and massive neutrinos. ``degen_hdm`` is the number of
    degenerate massive neutrino species and ``hubble`` is h, the Hubble
    constant in units of 100 km/s/Mpc. The redshift starts at 0 and is changed
    with :meth:`set_redshift`.

    Non-positive baryon or neutrino densities are replaced by a trace amount,
    since the formula cannot handle zero; a non-positive number of neutrino
    species is replaced by one.
    """

    def __init__(
        self,
        omega_matter: float,
        omega_baryon: float,
        omega_hdm: float,
        degen_hdm: float,
        omega_lambda: float,
        hubble: float,
    ) -> None:
        if omega_baryon < 0.0:
            warnings.warn("negative omega_baryon set to trace amount", RuntimeWarning, stacklevel=2)
        if omega_hdm < 0.0:
            warnings.warn("negative omega_hdm set to trace amount", RuntimeWarning, stacklevel=2)
        if hubble <= 0.0:
            raise ValueError("the Hubble constant must be positive")
        if hubble > 2.0:
            warnings.warn(
                "the Hubble constant should be in units of 100 km/s/Mpc",
                RuntimeWarning,
                stacklevel=2,
            )
        if omega_matter <= 0.0:
            raise ValueError("omega_matter must be positive")

        if degen_hdm <= 0.0:
            degen_hdm = 1.0
        if omega_baryon <= 0.0:
            omega_baryon = _TRACE_DENSITY
        if omega_hdm <= 0.0:
            omega_hdm = _TRACE_DENSITY

        self.omega_matter = omega_matter
        self.omega_baryon = omega_baryon
        self.omega_hdm = omega_hdm
        self.omega_lambda = omega_lambda
        self.hubble = hubble
        self.num_degen_hdm = float(degen_hdm)
        self.theta_cmb = theta_cmb = _THETA_CMB

        self.omega_curv = 1.0 - omega_matter - omega_lambda
        self.omhh = omhh = omega_matter * hubble ** 2
        self.obhh = obhh = omega_baryon * hubble ** 2
        self.onhh = omega_hdm * hubble ** 2
        self.f_baryon = omega_baryon / omega_matter
        self.f_hdm = omega_hdm / omega_matter
        self.f_cdm = 1.0 - self.f_baryon - self.f_hdm
        self.f_cb = self.f_cdm + self.f_baryon
        self.f_bnu = self.f_baryon + self.f_hdm

        self.z_equality = 25000.0 * omhh / theta_cmb ** 4  # actually 1 + z_eq
        self.k_equality = 0.0746 * omhh / theta_cmb ** 2

        z_drag_b1 = 0.313 * omhh ** -0.419 * (1 + 0.607 * omhh ** 0.674)
        z_drag_b2 = 0.238 * omhh ** 0.223
        self.z_drag = (
            1291 * omhh ** 0.251 / (1.0 + 0.659 * omhh ** 0.828)
            * (1.0 + z_drag_b1 * obhh ** z_drag_b2)
        )
        self.y_drag = self.z_equality / (1.0 + self.z_drag)

        self.sound_horizon_fit = 44.5 * math.log(9.83 / omhh) / math.sqrt(1.0 + 10.0 * obhh ** 0.75)

        self.p_c = p_c = 0.25 * (5.0 - math.sqrt(1 + 24.0 * self.f_cdm))
        self.p_cb = p_cb = 0.25 * (5.0 - math.sqrt(1 + 24.0 * self.f_cb))

        f_bnu, f_hdm, nu = self.f_bnu, self.f_hdm, self.num_degen_hdm
        y_drag = self.y_drag
        self.alpha_nu = (
            self.f_cdm / self.f_cb * (5.0 - 2.0 * (p_c + p_cb)) / (5.0 - 4.0 * p_cb)
            * (1 + y_drag) ** (p_cb - p_c)
            * (1 + f_bnu * (-0.553 + 0.126 * f_bnu * f_bnu))
            / (1 - 0.193 * math.sqrt(f_hdm * nu) + 0.169 * f_hdm * nu ** 0.2)
            * (1 + (p_c - p_cb) / 2 * (1 + 1 / (3.0 - 4.0 * p_c) / (7.0 - 4.0 * p_cb)) / (1 + y_drag))
        )
        self.alpha_gamma = math.sqrt(self.alpha_nu)
        self.beta_c = 1 / (1 - 0.949 * f_bnu)

        self.set_redshift(0.0)

    def set_redshift(self, redshift: float) -> None:
        """Set the redshift-dependent growth parameters.

        Raises ValueError for ``redshift <= -1``; warns above redshift 99,
        where the fit may be inaccurate.
        """
        if redshift <= -1.0:
            raise ValueError("redshift must be greater than -1")
        if redshift > _LARGE_REDSHIFT:
            warnings.warn(
                "large redshift entered; the transfer function may be inaccurate",
                RuntimeWarning,
                stacklevel=2,
            )

        om, ol = self.omega_matter, self.omega_lambda
        zp1 = 1.0 + redshift
        omega_denom = ol + zp1 ** 2 * (self.omega_curv + om * zp1)
        self.redshift = redshift
        self.omega_lambda_z = olz = ol / omega_denom
        self.omega_matter_z = omz = om * zp1 ** 3 / omega_denom
        self.growth_k0 = (
            self.z_equality / zp1 * 2.5 * omz
            / (omz ** (4.0 / 7.0) - olz + (1.0 + omz / 2.0) * (1.0 + olz / 70.0))
        )
        growth_today = (
            self.z_equality * 2.5 * om
            / (om ** (4.0 / 7.0) - ol + (1.0 + om / 2.0) * (1.0 + ol / 70.0))
        )
        self.growth_to_z0 = self.growth_k0 / growth_today

    def transfer_mpc(self, k: float) -> float:
        """CDM + baryon + neutrino density-weighted transfer function at ``k`` in Mpc^-1."""
        if k < 0.0:
            raise ValueError("the wavenumber must not be negative")

        nu, f_hdm, p_cb = self.num_degen_hdm, self.f_hdm, self.p_cb
        growth_k0 = self.growth_k0
        qq = k / self.omhh * self.theta_cmb ** 2

        y_freestream = 17.2 * f_hdm * (1 + 0.488 * f_hdm ** (-7.0 / 6.0)) * (nu * qq / f_hdm) ** 2
        temp1 = growth_k0 ** (1.0 - p_cb)
        temp2 = (growth_k0 / (1 + y_freestream)) ** 0.7
        growth_cbnu = (self.f_cb ** (0.7 / p_cb) + temp2) ** (p_cb / 0.7) * temp1

        gamma_eff = self.omhh * (
            self.alpha_gamma
            + (1 - self.alpha_gamma) / (1 + (k * self.sound_horizon_fit * 0.43) ** 4)
        )
        qq_eff = qq * self.omhh / gamma_eff

        tf_sup_l = math.log(2.71828 + 1.84 * self.beta_c * self.alpha_gamma * qq_eff)
        tf_sup_c = 14.4 + 325 / (1 + 60.5 * qq_eff ** 1.11)
        tf_sup = tf_sup_l / (tf_sup_l + tf_sup_c * qq_eff ** 2)

        qq_nu = 4.9 * qq * math.sqrt(nu / f_hdm)
        if qq_nu == 0.0:
            max_fs_correction = 1.0
        else:
            max_fs_correction = 1 + 1.2 * f_hdm ** 0.68 * nu ** (0.3 + 0.6 * f_hdm) / (
                qq_nu ** -1.3 + qq_nu ** 0.45
            )

        tf_master = tf_sup * max_fs_correction
        return tf_master * growth_cbnu / growth_k0

    def transfer_hmpc(self, k: float) -> float:
        """As :meth:`transfer_mpc` with ``k`` in h Mpc^-1."""
        return self.transfer_mpc(k * self.hubble)