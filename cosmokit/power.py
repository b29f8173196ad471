"""Linear and nonlinear matter power spectra and the correlation function.

The linear spectrum uses the Eisenstein & Hu fitting formulae. With no massive
neutrinos the fit with baryon acoustic oscillations is used. Otherwise the
mixed dark matter fit is used, which has neutrinos but no oscillations. The
nonlinear spectrum follows Peacock & Dodds (1996). Lengths are in Mpc.
"""

from __future__ import annotations

import math
import warnings

from cosmokit.eh_baryon import COBE_TCMB, BaryonTransfer
from cosmokit.eh_neutrino import NeutrinoTransfer
from cosmokit.numerics import integrate

__all__ = ["PI", "PowerSpectrum"]

PI = 3.141593
"""The value of pi used in the normalisation constants."""

_TRACE_DENSITY = 1e-5
_SIGMA8_RADIUS = 8.0
_LN_K_MIN = math.log(1.0e-3)
_LN_K_MAX = math.log(1.0e4)
_NORMALIZATION_TOL = 1.0e-9
_MAX_SECANT_STEPS = 500
_CORRELATION_TOL = 1.0e-4


class PowerSpectrum:
    """Matter power spectrum of one cosmology, normalised to ``sigma8``.

    Densities are in units of the critical density, ``n_neutrino`` is the
    number of degenerate massive neutrino species, ``hubble`` is h in units of
    100 km/s/Mpc, ``index`` the primordial spectral index and ``dndlnk`` its
    running. A non-positive baryon density is replaced by a trace amount.
    """

    def __init__(
        self,
        omega_matter: float,
        omega_lambda: float,
        omega_baryon: float,
        omega_neutrino: float,
        n_neutrino: float,
        hubble: float,
        index: float,
        dndlnk: float,
        sigma8: float,
    ) -> None:
        if omega_matter <= 0.0:
            raise ValueError("omega_matter must be positive")
        if hubble <= 0.0:
            raise ValueError("the Hubble constant must be positive")
        if omega_baryon < 0.0:
            warnings.warn("negative omega_baryon set to trace amount", RuntimeWarning, stacklevel=2)
        if omega_baryon <= 0.0:
            omega_baryon = _TRACE_DENSITY

        self.omega_matter = omega_matter
        self.omega_lambda = omega_lambda
        self.omega_baryon = omega_baryon
        self.omega_neutrino = omega_neutrino
        self.n_neutrino = n_neutrino
        self.hubble = hubble
        self.index = index
        self.dndlnk = dndlnk

        if omega_neutrino == 0.0:
            self._neutrino: NeutrinoTransfer | None = None
            self._baryon: BaryonTransfer | None = BaryonTransfer(
                omega_matter * hubble * hubble, omega_baryon / omega_matter, COBE_TCMB
            )
        else:
            self._baryon = None
            self._neutrino = NeutrinoTransfer(
                omega_matter, omega_baryon, omega_neutrino, n_neutrino, omega_lambda, hubble
            )

        self._growth_today = self._growth_suppression_raw(omega_matter, omega_lambda)
        self._amplitude = 1.0
        self.sigma8 = sigma8
        self.normalize(sigma8)

    @staticmethod
    def _growth_suppression_raw(omega_m: float, omega_l: float) -> float:
        return 2.5 * omega_m / (
            omega_m ** (4.0 / 7.0) - omega_l + (1 + 0.5 * omega_m) * (1 + omega_l / 70)
        )

    def _growth_suppression(self, a: float) -> float:
        omo, oml = self.omega_matter, self.omega_lambda
        if omo == 1.0:
            return self._growth_today
        omega_m_t = omo / (omo + oml * a ** 3 - a * (omo + oml - 1))
        omega_l_t = a ** 3 * oml * omega_m_t / omo
        return self._growth_suppression_raw(omega_m_t, omega_l_t)

    def _transfer(self, k: float, z: float) -> float:
        if self._neutrino is None:
            return self._baryon.full(k)
        if self._neutrino.redshift != z:
            self._neutrino.set_redshift(z)
        return self._neutrino.transfer_mpc(k)

    def _power_unscaled(self, k: float, z: float) -> float:
        """Linear power without the growth factor, normalised to 1 at z = 0."""
        h = self.hubble
        trans = self._transfer(k, z)
        return (
            self._amplitude
            * (k / h) ** (self.index + self.dndlnk * math.log(k))
            * trans * trans
            / (h / 3.0e3) ** 3
        )

    def _tophat_variance_unscaled(self, radius: float, z: float) -> float:
        h = self.hubble

        def integrand(lgk: float) -> float:
            k = math.exp(lgk)
            r = k * radius / h
            if r <= 1.0e-4:
                win = (1 - r * r / 10) / 3
            else:
                win = (math.sin(r) / r - math.cos(r)) / (r * r)
            return k ** 3 * self._power_unscaled(k, z) * win * win

        return 9 * integrate(integrand, _LN_K_MIN, _LN_K_MAX, _NORMALIZATION_TOL) / (2 * PI * PI)

    def normalize(self, sigma8: float) -> float:
        """Set the amplitude so that the linear rms in 8 Mpc/h spheres is ``sigma8``.

        Returns the unit-amplitude variance used for the normalisation.
        """
        self.sigma8 = sigma8
        self._amplitude = 1.0
        factor = self._tophat_variance_unscaled(_SIGMA8_RADIUS, 0.0)
        self._amplitude = sigma8 * sigma8 / factor
        return factor

    def slope(self, k: float) -> float:
        """Logarithmic slope of the power spectrum at ``k``."""
        qt = k * math.exp(2 * self.omega_baryon) / (self.omega_matter * self.hubble ** 2)
        return (
            self.index - 2.0
            + 4.68 * qt / (math.log(1 + 2.34 * qt) * (1 + 2.34 * qt))
            - 0.5 * qt * (3.89 + qt * (5.1842e2 + qt * (4.8831e2 + 8.1088e3 * qt)))
            / (1 + qt * (3.89 + qt * (2.5921e2 + qt * (1.6277e2 + 2.0272e3 * qt))))
        )

    def linear_power(self, k: float, z: float) -> float:
        """Linear power spectrum P(k, z) / a^2."""
        if k <= 0.0:
            raise ValueError("the wavenumber must be positive")
        if z == 0.0:
            return self._power_unscaled(k, 0.0)
        ratio = self._growth_suppression(1.0 / (1 + z)) / self._growth_today
        return ratio * ratio * self._power_unscaled(k, z)

    def nonlinear_power(self, k: float, z: float) -> float:
        """Nonlinear power spectrum P(k, z) / a^2 by the Peacock & Dodds mapping."""
        if k <= 0.0:
            raise ValueError("the wavenumber must be positive")
        a = 1.0 / (1 + z)
        go = self._growth_today
        g = self._growth_suppression(a)

        def mapped(kl: float, exponent: float) -> tuple[float, float]:
            nin = 1 + self.slope(0.75 * kl) / 3.0
            big_a = 0.482 * nin ** -0.947
            big_b = 0.226 * nin ** -1.778
            alpha = 3.31 * nin ** -0.244
            beta = 0.862 * nin ** -0.287
            v = 11.55 * nin ** -0.423
            pow_l = 5.066e-2 * a * a * kl ** 3 * self._power_unscaled(kl, z) * g * g / (go * go)
            pow_nl = pow_l * (
                (1 + big_b * beta * pow_l + (big_a * pow_l) ** (alpha * beta))
                / (1 + (g ** 3 * (big_a * pow_l) ** alpha / (v * math.sqrt(pow_l))) ** beta)
            ) ** (1.0 / beta)
            return pow_nl, kl * (1.0 + pow_nl) ** exponent

        pow_nl, kn = mapped(k, 0.333333)

        kll, klh = 0.0, k
        knl, knh = 0.0, kn
        steps = 0
        while k <= 1.0e4 * abs(kn - k) and steps < _MAX_SECANT_STEPS:
            kl = kll - (knl - k) * (kll - klh) / (knl - knh)
            pow_nl, kn = mapped(kl, 0.33333)
            if kn - k < 0.0:
                kll, knl = kl, kn
            else:
                klh, knh = kl, kn
            steps += 1
        return 19.739 * pow_nl / (k ** 3 * a * a)

    def correlation_function(
        self, radius: float, redshift: float, k_max: float = 100.0, k_min: float = 1.0e-3
    ) -> float:
        """Dark matter correlation function at comoving ``radius`` from the nonlinear spectrum.

        The integral runs over ``[k_min, k_max]`` in pieces of a quarter
        period of the Bessel function until a piece adds little.
        """
        if radius <= 0.0:
            raise ValueError("the radius must be positive")
        if k_max < k_min:
            k_min, k_max = k_max, k_min
        norm = 0.5 / PI / PI / (1 + redshift) / (1 + redshift)

        def integrand(k: float) -> float:
            rk = radius * k
            j0 = 1.0 if rk < 1.0e-3 else math.sin(rk) / rk
            return norm * j0 * k * k * self.nonlinear_power(k, redshift)

        step = PI / radius / 2
        lo = k_min
        hi = min(step, k_max)
        total = 0.0
        while True:
            piece = integrate(integrand, lo, hi, _CORRELATION_TOL)
            total += piece
            if total == 0.0 or abs(piece / total) <= _CORRELATION_TOL:
                return total
            lo = hi
            hi = min(hi + step, k_max)