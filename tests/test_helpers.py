import numpy as np
import pytest

from MiniIsoTools.helpers import (
    SCHEMES,
    ELECTRON_KEYS,
    MUON_KEYS,
    getConeRadius,
    getRhoAreaNeutral,
    getDeltaBetaNeutral,
    getNeutralCorrections,
    makeMiniIsoDict,
)


@pytest.mark.parametrize("pt", [50., 62.5, 100., 150., 200.])
def test_cone_radius_inside_window(pt):
    assert getConeRadius(pt) == pytest.approx(10./pt)


def test_cone_radius_clamped():
    assert getConeRadius(5.) == pytest.approx(0.2)
    assert getConeRadius(49.9) == pytest.approx(0.2)
    assert getConeRadius(200.1) == pytest.approx(0.05)
    assert getConeRadius(3000.) == pytest.approx(0.05)


def test_cone_radius_array():
    radii = getConeRadius(np.array([10., 100., 500.]))
    np.testing.assert_allclose(radii, [0.2, 0.1, 0.05])


def test_rho_area_scales_effective_area_to_cone():
    # (0.15/0.3)^2 = 0.25
    assert getRhoAreaNeutral(3., 10., 0.2, 0.15) == pytest.approx(3. - 10.*0.2*0.25)


def test_corrections_never_negative():
    assert getRhoAreaNeutral(0.5, 1000., 0.1, 0.2) == 0.
    assert getDeltaBetaNeutral(0.5, 4.) == 0.
    assert getDeltaBetaNeutral(3., 4.) == pytest.approx(1.)


def test_weights_scheme_ignores_rho():
    low = getNeutralCorrections(2., 0.7, 1., 0., 0.1, 0.1)
    high = getNeutralCorrections(2., 0.7, 1., 50., 0.1, 0.1)
    assert low["weights"] == high["weights"] == 0.7
    assert low["raw"] == high["raw"] == 2.
    assert list(low) == list(SCHEMES)


def test_output_record_sums_and_order():
    neutral = {"weights": 0.5, "raw": 1., "rhoArea": 0.25, "deltaBeta": 0.}
    ret = makeMiniIsoDict(0.1, 2., 3., neutral, 40., isoPhotRaw=0.6, isoNHadRaw=0.4)
    assert tuple(ret) == ELECTRON_KEYS
    for scheme in SCHEMES:
        assert ret[f"miniIso_Abs_{scheme}"] == pytest.approx(2. + neutral[scheme])
        assert ret[f"miniIso_Rel_{scheme}"] == pytest.approx((2. + neutral[scheme])/40.)


def test_relative_isolation_zero_pt_is_not_trapped():
    neutral = dict.fromkeys(SCHEMES, 1.)
    ret = makeMiniIsoDict(0.2, 1., 0., neutral, 0.)
    assert tuple(ret) == MUON_KEYS
    assert ret["miniIso_Rel_raw"] == float("inf")


def test_key_set_sizes():
    assert len(ELECTRON_KEYS) == 17
    assert len(MUON_KEYS) == 15
    assert set(MUON_KEYS) < set(ELECTRON_KEYS)


def test_relative_isolation_uses_single_precision_pt():
    neutral = dict.fromkeys(SCHEMES, 0.)
    ret = makeMiniIsoDict(0.2, 1., 0., neutral, 33.3)
    assert ret["miniIso_Rel_raw"] == 1./float(np.float32(33.3))
    assert ret["miniIso_Rel_raw"] != 1./33.3
