import pytest

from cosmokit.power import PowerSpectrum


@pytest.fixture(scope="module")
def lcdm():
    return PowerSpectrum(0.3, 0.7, 0.045, 0.0, 1.0, 0.7, 0.96, 0.0, 0.8)


@pytest.fixture(scope="module")
def einstein_de_sitter():
    return PowerSpectrum(1.0, 0.0, 0.04, 0.0, 1.0, 0.7, 1.0, 0.0, 0.8)


def test_normalize_factor_independent_of_sigma8():
    ps = PowerSpectrum(0.3, 0.7, 0.045, 0.0, 1.0, 0.7, 0.96, 0.0, 0.8)
    first = ps.normalize(0.8)
    second = ps.normalize(1.2)
    assert first == pytest.approx(second, rel=1e-9)
    assert ps.sigma8 == 1.2


def test_linear_power_scales_with_sigma8_squared():
    ps = PowerSpectrum(0.3, 0.7, 0.045, 0.0, 1.0, 0.7, 0.96, 0.0, 0.8)
    before = ps.linear_power(0.1, 0.0)
    ps.normalize(1.6)
    after = ps.linear_power(0.1, 0.0)
    assert after / before == pytest.approx(4.0, rel=1e-9)


def test_slope_tends_to_index_at_small_k(lcdm):
    assert lcdm.slope(1e-8) == pytest.approx(0.96, abs=1e-4)


def test_slope_decreases_towards_small_scales(lcdm):
    assert lcdm.slope(10.0) < lcdm.slope(0.01)


def test_linear_power_positive(lcdm):
    assert lcdm.linear_power(0.05, 0.0) > 0.0


def test_growth_ratio_independent_of_k(lcdm):
    r1 = lcdm.linear_power(0.01, 1.0) / lcdm.linear_power(0.01, 0.0)
    r2 = lcdm.linear_power(1.0, 1.0) / lcdm.linear_power(1.0, 0.0)
    assert r1 == pytest.approx(r2, rel=1e-12)
    assert r1 > 1.0


def test_einstein_de_sitter_scaled_power_constant_in_z(einstein_de_sitter):
    at_zero = einstein_de_sitter.linear_power(0.2, 0.0)
    at_two = einstein_de_sitter.linear_power(0.2, 2.0)
    assert at_two == pytest.approx(at_zero, rel=1e-12)


def test_nonlinear_matches_linear_on_large_scales(lcdm):
    k = 1e-4
    assert lcdm.nonlinear_power(k, 0.0) == pytest.approx(lcdm.linear_power(k, 0.0), rel=1e-2)


def test_nonlinear_exceeds_linear_on_small_scales(lcdm):
    assert lcdm.nonlinear_power(10.0, 0.0) > lcdm.linear_power(10.0, 0.0)


def test_nonlinear_rejects_non_positive_k(lcdm):
    with pytest.raises(ValueError):
        lcdm.nonlinear_power(0.0, 0.0)


def test_correlation_function_swapped_limits(lcdm):
    forward = lcdm.correlation_function(5.0, 0.0, 1.0, 1.0e-3)
    swapped = lcdm.correlation_function(5.0, 0.0, 1.0e-3, 1.0)
    assert forward == pytest.approx(swapped, rel=1e-12)
    assert forward > 0.0


def test_correlation_function_rejects_bad_radius(lcdm):
    with pytest.raises(ValueError):
        lcdm.correlation_function(0.0, 0.0)


def test_rejects_non_positive_matter_density():
    with pytest.raises(ValueError):
        PowerSpectrum(0.0, 0.7, 0.045, 0.0, 1.0, 0.7, 0.96, 0.0, 0.8)


def test_rejects_non_positive_hubble():
    with pytest.raises(ValueError):
        PowerSpectrum(0.3, 0.7, 0.045, 0.0, 1.0, 0.0, 0.96, 0.0, 0.8)


def test_neutrino_cosmology_normalises():
    ps = PowerSpectrum(0.3, 0.7, 0.045, 0.01, 1.0, 0.7, 0.96, 0.0, 0.8)
    before = ps.linear_power(0.1, 0.0)
    ps.normalize(0.4)
    after = ps.linear_power(0.1, 0.0)
    assert before > 0.0
    assert after / before == pytest.approx(0.25, rel=1e-9)


def test_negative_baryon_density_warns():
    with pytest.warns(RuntimeWarning):
        ps = PowerSpectrum(0.3, 0.7, -0.01, 0.0, 1.0, 0.7, 0.96, 0.0, 0.8)
    assert ps.omega_baryon == 1e-5