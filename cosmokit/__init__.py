"""Matter power spectra, Eisenstein & Hu transfer functions, NFW halo profiles and numerical helpers."""

__version__ = "1.0.0"
__all__ = ["numerics", "stats", "nfw", "eh_baryon", "eh_neutrino", "power"]