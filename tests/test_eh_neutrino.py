import math

import pytest

from cosmokit.eh_neutrino import NeutrinoTransfer


def make(**overrides):
    params = dict(
        omega_matter=0.3,
        omega_baryon=0.045,
        omega_hdm=0.01,
        degen_hdm=1,
        omega_lambda=0.7,
        hubble=0.7,
    )
    params.update(overrides)
    return NeutrinoTransfer(**params)


def test_fractions_sum_to_one():
    tf = make()
    assert tf.f_cdm + tf.f_baryon + tf.f_hdm == pytest.approx(1.0)
    assert tf.f_cb == pytest.approx(tf.f_cdm + tf.f_baryon)
    assert tf.f_bnu == pytest.approx(tf.f_baryon + tf.f_hdm)


def test_curvature_flat():
    tf = make()
    assert tf.omega_curv == pytest.approx(0.0, abs=1e-12)


def test_zero_densities_become_trace_amounts():
    tf = make(omega_baryon=0.0, omega_hdm=0.0)
    assert tf.omega_baryon == 1e-5
    assert tf.omega_hdm == 1e-5


def test_negative_baryon_warns_and_is_replaced():
    with pytest.warns(RuntimeWarning):
        tf = make(omega_baryon=-0.1)
    assert tf.omega_baryon == 1e-5


def test_nonpositive_neutrino_species_becomes_one():
    tf = make(degen_hdm=0)
    assert tf.num_degen_hdm == 1.0


def test_nonpositive_hubble_rejected():
    with pytest.raises(ValueError):
        make(hubble=0.0)


def test_large_hubble_warns():
    with pytest.warns(RuntimeWarning):
        make(hubble=70.0)


def test_illegal_redshift_rejected():
    tf = make()
    with pytest.raises(ValueError):
        tf.set_redshift(-1.0)


def test_large_redshift_warns():
    tf = make()
    with pytest.warns(RuntimeWarning):
        tf.set_redshift(150.0)
    assert tf.redshift == 150.0


def test_growth_relative_to_today_is_one_at_zero():
    tf = make()
    assert tf.growth_to_z0 == pytest.approx(1.0)


def test_growth_decreases_with_redshift():
    tf = make()
    values = []
    for z in (0.0, 1.0, 3.0):
        tf.set_redshift(z)
        values.append(tf.growth_to_z0)
    assert values[0] > values[1] > values[2]


def test_matter_dominates_at_high_redshift():
    tf = make()
    tf.set_redshift(50.0)
    assert tf.omega_matter_z == pytest.approx(1.0, abs=1e-3)
    assert tf.omega_matter_z + tf.omega_lambda_z == pytest.approx(1.0)


def test_transfer_tends_to_one_on_large_scales():
    tf = make()
    assert tf.transfer_mpc(0.0) == pytest.approx(1.0, abs=1e-3)
    assert tf.transfer_mpc(1e-6) == pytest.approx(1.0, abs=1e-3)


def test_transfer_falls_with_wavenumber():
    tf = make()
    values = [tf.transfer_mpc(k) for k in (1e-3, 1e-2, 1e-1, 1.0, 10.0)]
    assert all(v > 0 for v in values)
    assert values == sorted(values, reverse=True)


def test_hmpc_matches_mpc():
    tf = make()
    assert tf.transfer_hmpc(0.2) == pytest.approx(tf.transfer_mpc(0.2 * 0.7))


def test_more_neutrinos_suppress_small_scales():
    light = make(omega_hdm=0.001)
    heavy = make(omega_hdm=0.05)
    assert heavy.transfer_mpc(1.0) < light.transfer_mpc(1.0)


def test_negative_wavenumber_rejected():
    tf = make()
    with pytest.raises(ValueError):
        tf.transfer_mpc(-0.1)


def test_transfer_is_finite():
    tf = make()
    tf.set_redshift(2.0)
    assert math.isfinite(tf.transfer_mpc(5.0))
    assert 0.0 < tf.transfer_mpc(5.0) < 1.0