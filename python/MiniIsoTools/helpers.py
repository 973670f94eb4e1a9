#!/usr/bin/env python
"""
Helper functions for lepton mini-isolation.

Provides utilities for:
- The pt-dependent cone radius
- Pileup corrections of the neutral isolation component (weights, raw, rhoArea, deltaBeta)
- Filling the output record with a fixed key set for electrons and muons

Mini-isolation reference:
https://indico.cern.ch/event/388718/contributions/921752/attachments/777177/1065760/SUS_miniISO_4-21-15.pdf
"""

import numpy as np

# pileup correction schemes, in output order
SCHEMES = ("weights", "raw", "rhoArea", "deltaBeta")

# effective areas are calibrated for a fixed cone of this size
EA_REFERENCE_CONE = 0.3

# sentinel for quantities of an invalid candidate
INVALID = -1.


def getConeRadius(pt, ptMin=50., ptMax=200., kt=10.):
    """
    Compute the mini-isolation cone radius.

    R = kt / pt, with pt clamped to [ptMin, ptMax] before the inversion,
    i.e. R is within [0.05, 0.2] with the default parameters.

    Args:
        pt: Transverse momentum [GeV], scalar or numpy array
        ptMin, ptMax: Clamping window [GeV]
        kt: Numerator [GeV]

    Returns:
        Cone radius (float, or array for array input)
    """
    radius = kt / np.clip(pt, ptMin, ptMax)
    if np.ndim(radius) == 0:
        return float(radius)
    return radius


def getRhoAreaNeutral(isoNeutralRaw, rho, effArea, outerR):
    """Neutral isolation after subtracting rho times the effective area scaled to the cone."""
    return max(0., isoNeutralRaw - rho*effArea*(outerR/EA_REFERENCE_CONE)**2)


def getDeltaBetaNeutral(isoNeutralRaw, absIsoPU, dBetaFactor=0.5):
    """Neutral isolation after subtracting dBetaFactor times the charged pileup sum."""
    return max(0., isoNeutralRaw - dBetaFactor*absIsoPU)


def getNeutralCorrections(isoNeutralRaw, isoNeutralWeighted, absIsoPU, rho, effArea, outerR):
    """
    Evaluate the neutral isolation for all pileup correction schemes.

    Returns:
        Dictionary {scheme: neutral isolation}, in SCHEMES order
    """
    return {
        "weights": isoNeutralWeighted,
        "raw": isoNeutralRaw,
        "rhoArea": getRhoAreaNeutral(isoNeutralRaw, rho, effArea, outerR),
        "deltaBeta": getDeltaBetaNeutral(isoNeutralRaw, absIsoPU),
    }


def getInvalidCorrections():
    return {scheme: INVALID for scheme in SCHEMES}


def fillNeutralAbsRel(ret, absIsoCharged, neutral, candpt):
    """
    Add the absolute neutral, absolute total and relative isolation of every scheme.

    The relative isolation divides by the single-precision candidate pt, as in the
    stored lepton ntuples, with IEEE semantics: candpt <= 0 gives a negative or
    infinite value instead of raising.

    Args:
        ret: Output dictionary, updated in place
        absIsoCharged: Charged isolation sum
        neutral: Dictionary {scheme: neutral isolation}
        candpt: Candidate pt (INVALID for invalid candidates)
    """
    ptF = np.float64(np.float32(candpt))
    with np.errstate(divide="ignore", invalid="ignore"):
        for postfix in SCHEMES:
            absIso = absIsoCharged + neutral[postfix]
            ret[f"miniIso_AbsNeutral_{postfix}"] = float(neutral[postfix])
            ret[f"miniIso_Abs_{postfix}"] = float(absIso)
            ret[f"miniIso_Rel_{postfix}"] = float(np.float64(absIso) / ptF)
    return ret


def makeMiniIsoDict(outerR, absIsoCharged, absIsoPU, neutral, candpt, isoPhotRaw=None, isoNHadRaw=None):
    """
    Build the mini-isolation output record.

    Photon and neutral hadron sums are only reported when given (electrons);
    the resulting key set is ELECTRON_KEYS or MUON_KEYS.
    """
    ret = {}
    ret["miniIso_R"] = float(outerR)
    ret["miniIso_AbsCharged"] = float(absIsoCharged)
    if isoPhotRaw is not None:
        ret["miniIso_AbsPho"] = float(isoPhotRaw)
    if isoNHadRaw is not None:
        ret["miniIso_AbsNHad"] = float(isoNHadRaw)
    ret["miniIso_AbsPU"] = float(absIsoPU)
    return fillNeutralAbsRel(ret, absIsoCharged, neutral, candpt)


def _schemeKeys():
    return tuple(f"miniIso_{kind}_{postfix}" for postfix in SCHEMES
                 for kind in ("AbsNeutral", "Abs", "Rel"))


MUON_KEYS = ("miniIso_R", "miniIso_AbsCharged", "miniIso_AbsPU") + _schemeKeys()
ELECTRON_KEYS = ("miniIso_R", "miniIso_AbsCharged", "miniIso_AbsPho", "miniIso_AbsNHad", "miniIso_AbsPU") + _schemeKeys()
