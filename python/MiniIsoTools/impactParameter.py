#!/usr/bin/env python
"""
Impact parameter (significance) variables for electrons and muons.

Same dxy/dz definitions as the cut-based electron and muon identification:
https://github.com/cms-sw/cmssw/blob/CMSSW_7_4_15/RecoEgamma/ElectronIdentification/plugins/cuts/GsfEleDxyCut.cc#L64
https://github.com/cms-sw/cmssw/blob/CMSSW_7_4_15/DataFormats/MuonReco/src/MuonSelectors.cc#L756
"""

from abc import ABC, abstractmethod

import numpy as np


def getSIP3D(cand):
    """3D impact parameter over its uncertainty; inf/nan for a zero uncertainty."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(cand.DB()) / np.float64(cand.EDB()))


class PVVars(ABC):
    @abstractmethod
    def getTrack(self, cand):
        pass

    def computePVVars(self, cand, event):
        """
        Args:
            cand: Electron or Muon
            event: EventContext (may be None)

        Returns:
            Dictionary with dxy, dz (0 without vertex or track) and dca
        """
        pv = event.primaryVertexPosition() if event is not None else None
        track = self.getTrack(cand) if cand.HasOriginalObject() else None

        ret = {}
        ret["dxy"] = track.Dxy(pv) if pv is not None and track is not None else 0.
        ret["dz"] = track.Dz(pv) if pv is not None and track is not None else 0.
        ret["dca"] = getSIP3D(cand)
        return ret


class ElectronPVVars(PVVars):
    def getTrack(self, cand):
        return cand.GsfTrack()


class MuonPVVars(PVVars):
    def getTrack(self, cand):
        return cand.BestTrack()
