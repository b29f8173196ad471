# cosmokit

Tools for structure-formation cosmology, written in pure Python with no
runtime dependencies.

- `cosmokit.eh_baryon`: the Eisenstein & Hu (1997) transfer function for
  CDM + baryons. It includes the baryon acoustic oscillations.
- `cosmokit.eh_neutrino`: the Eisenstein & Hu fit for CDM + baryons +
  massive neutrinos. It has no oscillations and uses the free-streaming
  coefficients of Kiakotou et al. (2008).
- `cosmokit.power`: a linear matter power spectrum normalised to a chosen
  `sigma8`, the Peacock & Dodds (1996) nonlinear spectrum, and the dark
  matter correlation function.
- `cosmokit.nfw`: properties of the Navarro–Frenk–White halo profile, and the
  Moster et al. (2010) stellar mass fraction.
- `cosmokit.numerics`: Romberg integration, Brent and bisection root finding,
  bracketing searches in tables, interpolation, grids and simple summaries.
- `cosmokit.stats`: mean, variance, Pearson correlation and a running
  covariance `Accumulator`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Units

Lengths are in Mpc and masses in solar masses. Velocities are in km/s.
Wavenumbers are in Mpc^-1, except in `NeutrinoTransfer.transfer_hmpc`, which
takes h Mpc^-1.

## Usage

### Power spectrum

```python
from cosmokit.power import PowerSpectrum

ps = PowerSpectrum(
    omega_matter=0.25, omega_lambda=0.75, omega_baryon=0.045,
    omega_neutrino=0.0, n_neutrino=0, hubble=0.73,
    index=1.0, dndlnk=0.0, sigma8=0.9,
)

ps.linear_power(0.1, 0.0)        # linear P(k, z) / a^2
ps.nonlinear_power(0.1, 1.0)     # nonlinear P(k, z) / a^2 (Peacock & Dodds)
ps.slope(0.1)                    # logarithmic slope of the spectrum
ps.normalize(0.8)                # renormalise to a new sigma8
ps.correlation_function(10.0, 0.0, 100.0, 1.0e-3)
```

When `omega_neutrino` is zero, the spectrum uses the baryonic fit with
oscillations. Otherwise it uses the massive-neutrino fit. A non-positive
baryon density is replaced by a trace amount. A negative baryon density also
issues a `RuntimeWarning`. A non-positive `omega_matter` or `hubble` raises
`ValueError`, and so does a non-positive wavenumber.

`normalize` sets the amplitude so that the linear rms in spheres of radius
8 (in the units of the normalisation integral) equals `sigma8`. It returns the
variance the spectrum has at unit amplitude.

`correlation_function(radius, redshift, k_max=100.0, k_min=1e-3)` integrates
the nonlinear spectrum. It works through the k range in pieces of a quarter
Bessel period and stops once a piece adds a small enough fraction.

### Transfer functions

```python
from cosmokit.eh_baryon import BaryonTransfer
from cosmokit.eh_neutrino import NeutrinoTransfer

tf = BaryonTransfer(omega0hh=0.14, f_baryon=0.17, tcmb=2.728)
pieces = tf.transfer(0.1)        # TransferPieces(full, baryon, cdm)
tf.full(0.1)

nu = NeutrinoTransfer(0.3, 0.04, 0.01, 1, 0.7, 0.7)
nu.set_redshift(0.5)
nu.transfer_mpc(0.1)             # k in Mpc^-1
nu.transfer_hmpc(0.1)            # k in h Mpc^-1
```

`BaryonTransfer` has the following behaviour:

- It raises `ValueError` unless `omega0hh` and `f_baryon` are positive.
- A non-positive `tcmb` selects the COBE value, `COBE_TCMB`.
- Negative `k` is treated as positive.
- At `k = 0` every piece is 1.

`NeutrinoTransfer` has the following behaviour:

- It starts at redshift 0.
- `transfer_mpc` returns the density-weighted transfer function for CDM +
  baryons + neutrinos.
- `set_redshift` raises `ValueError` for redshifts at or below -1. It warns
  above 99.

### NFW halos

```python
from cosmokit import nfw

nfw.v200(1.0e12, 0.2)                      # circular velocity at R200
nfw.vmax(10.0, 1.0e12, 0.2)                # maximum circular velocity
nfw.circular_velocity(0.5, 10.0, 1.0e12, 0.2)
nfw.enclosed_mass(0.5, 10.0, 1.0e12)
nfw.density(10.0, 0.5)                     # in units of the critical density
nfw.central_overdensity(10.0)
nfw.moster_stellar_mass_fraction(1.0e12)
```

The radius arguments `x` are in units of R200. The concentration `cons` is
R200 / Rs.

`concentration_from_vmax(v_max, m200, r200)` solves for the concentration
that gives `v_max`. It raises `ValueError` when the result would lie outside
[2.175, 1000].

`match_nfw(v_max, r_half, mass)` returns `(concentration, radius)` for a halo
with the given maximum velocity, half-mass radius and mass. It returns
`(0.0, 0.0)` for a non-positive mass. It raises `ValueError` when the inputs
are inconsistent.

The constants `GRAV` (G / c^2 in Mpc / Msun) and `LIGHTSPEED` (km/s) are
exported.

### Numerics and statistics

```python
import math
from cosmokit.numerics import integrate, brent_root, locate, interpolate_y
from cosmokit.stats import Accumulator, mean, variance, correlation

integrate(math.sin, 0.0, math.pi, 1.0e-8)       # about 2.0
brent_root(lambda x: x * x - 2.0, 0.0, 2.0, 1.0e-10)
locate([1.0, 2.0, 3.0], 2.5)                    # 1

acc = Accumulator(2)
acc.add([1.0, 2.0])
acc.add([2.0, 4.0])
acc.cov_matrix()                                # nested lists
```

Failures raise exceptions:

- `integrate` raises `ValueError` when it does not converge.
- `brent_root` and `bisection_search` raise `ValueError` when the root is not
  bracketed.
- `brent_root` raises `RuntimeError` when it runs out of iterations.

## What the package does not do

It covers the power spectrum, the transfer functions and the NFW profile
alone. It does not provide:

- cosmological distances or ages;
- halo mass functions or halo bias;
- cosmology-dependent halo quantities such as virial radii, formation
  redshifts or concentration–mass relations;
- halo-model or lensing convergence power spectra.

There is no command-line interface.