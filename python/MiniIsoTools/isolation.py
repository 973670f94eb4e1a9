#!/usr/bin/env python
"""
Electron and muon mini-isolation.

The particle-flow cone sums come from an IsolationComputer; the tools here pick the
cone geometry, apply the four pileup corrections and fill the output record.

Implementation follows the heppy lepton analyzer:
https://github.com/CERN-PH-CMG/cmg-cmssw/blob/fc44bf40c03c475725d06d1d1f68c2e594c49eff/PhysicsTools/Heppy/python/analyzers/objects/LeptonAnalyzer.py
"""

import threading
from abc import ABC, abstractmethod
from enum import IntEnum

from MiniIsoTools.effectiveAreas import EffectiveAreas
from MiniIsoTools.helpers import (
    INVALID,
    getConeRadius,
    getNeutralCorrections,
    getInvalidCorrections,
    makeMiniIsoDict,
)


# no event handed to the isolation computer yet
_NO_EVENT = object()


class SelfVeto(IntEnum):
    """Which of the candidate's own constituents are removed from its cone."""
    NONE = 0
    ALL = 1
    FIRST = 2


class IsolationComputer(ABC):
    """
    Particle-flow isolation sums around a candidate.

    Every sum takes the outer cone radius dR, the inner veto radius innerR, the
    minimum pt threshold of the summed particles and the self-veto policy.
    The computer holds the particles of one event: setCurrentEvent must be called
    before the sums of that event are requested.
    """
    @abstractmethod
    def setCurrentEvent(self, event):
        pass

    @abstractmethod
    def chargedAbsIso(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    @abstractmethod
    def puAbsIso(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    @abstractmethod
    def photonAbsIsoRaw(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    @abstractmethod
    def neutralHadAbsIsoRaw(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    @abstractmethod
    def photonAbsIsoWeighted(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    @abstractmethod
    def neutralHadAbsIsoWeighted(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    # combined photon + neutral hadron sums, the only neutral sums used for muons
    @abstractmethod
    def neutralAbsIsoRaw(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass

    @abstractmethod
    def neutralAbsIsoWeighted(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        pass


class MiniIsolation(ABC):
    """
    Shared part of the electron and muon mini-isolation tools.

    Args:
        isoComp: IsolationComputer providing the cone sums
        ea: EffectiveAreas, or the path of an effective area file (R=0.3 cone)
        verbose: Print a note for every invalid candidate
    """
    leptonName = "lepton"

    def __init__(self, isoComp, ea, verbose=False):
        self.isoComp = isoComp
        self.ea = ea if isinstance(ea, EffectiveAreas) else EffectiveAreas(ea)
        self.verbose = verbose
        self._currentEvent = _NO_EVENT
        self._eventLock = threading.Lock()

    def beginEvent(self, event):
        """Hand the event to the isolation computer. Call once at the start of every event."""
        with self._eventLock:
            self.isoComp.setCurrentEvent(event)
            self._currentEvent = event

    def _ensureEvent(self, event):
        with self._eventLock:
            if event is not self._currentEvent:
                self.isoComp.setCurrentEvent(event)
                self._currentEvent = event

    def isValid(self, cand):
        return cand is not None

    def computeMiniIsolation(self, cand, event):
        """
        Compute the mini-isolation variables of one candidate.

        Args:
            cand: Lepton, or None if the reference is missing
            event: EventContext of the event the candidate belongs to (may be None)

        Returns:
            Dictionary {variable name: value}, same keys for valid and invalid candidates
        """
        self._ensureEvent(event)
        rho = event.currentPileupDensity() if event is not None else 0.

        valid = self.isValid(cand)
        if not valid:
            if self.verbose:
                print(f"[MiniIsolation] {self.describeInvalid(cand)}")
            return self.fillInvalid()

        outerR = getConeRadius(cand.Pt())
        return self.fillValid(cand, outerR, rho)

    def describeInvalid(self, cand):
        return f"Null {self.leptonName}"

    @abstractmethod
    def fillValid(self, cand, outerR, rho):
        pass

    @abstractmethod
    def fillInvalid(self):
        pass


class ElectronMiniIsolation(MiniIsolation):
    """
    Electron mini-isolation.

    Endcap electrons get inner vetoes for charged particles and photons (footprint
    of the electron shower); the effective area is evaluated at the supercluster eta.
    """
    leptonName = "electron"

    def isValid(self, cand):
        return cand is not None and cand.SuperCluster() is not None

    def describeInvalid(self, cand):
        if cand is None:
            return "Null electron: candidate is null; supercluster ref is NA null"
        return "Null electron: candidate is not null; supercluster ref is null"

    def fillValid(self, cand, outerR, rho):
        isoComp = self.isoComp
        innerRPh = 0.08 if not cand.IsEB() else 0.
        innerRCh = 0.015 if not cand.IsEB() else 0.

        absIsoCharged = isoComp.chargedAbsIso(cand, outerR, innerRCh, 0., SelfVeto.NONE)
        absIsoPU = isoComp.puAbsIso(cand, outerR, innerRCh, 0., SelfVeto.NONE)
        isoPhotRaw = isoComp.photonAbsIsoRaw(cand, outerR, innerRPh, 0., SelfVeto.NONE)
        isoNHadRaw = isoComp.neutralHadAbsIsoRaw(cand, outerR, 0., 0., SelfVeto.NONE)
        isoNeutralWeighted = (
            isoComp.photonAbsIsoWeighted(cand, outerR, innerRPh, 0., SelfVeto.NONE)
            + isoComp.neutralHadAbsIsoWeighted(cand, outerR, 0., 0., SelfVeto.NONE)
        )
        effArea = self.ea.getEffectiveArea(cand.SuperCluster().Eta())
        neutral = getNeutralCorrections(isoPhotRaw + isoNHadRaw, isoNeutralWeighted,
                                        absIsoPU, rho, effArea, outerR)
        return makeMiniIsoDict(outerR, absIsoCharged, absIsoPU, neutral, cand.Pt(),
                               isoPhotRaw=isoPhotRaw, isoNHadRaw=isoNHadRaw)

    def fillInvalid(self):
        # neutral sums stay at the sentinel, Abs = -2 and Rel = 2 for every scheme
        return makeMiniIsoDict(0., INVALID, INVALID, getInvalidCorrections(), INVALID,
                               isoPhotRaw=INVALID, isoNHadRaw=INVALID)


class MuonMiniIsolation(MiniIsolation):
    """
    Muon mini-isolation.

    Fixed inner vetoes; pileup and neutral sums only count particles above 0.5 GeV.
    Only the combined neutral sums of the isolation computer are used.
    """
    leptonName = "muon"

    def fillValid(self, cand, outerR, rho):
        isoComp = self.isoComp
        absIsoCharged = isoComp.chargedAbsIso(cand, outerR, 0.0001, 0.)
        absIsoPU = isoComp.puAbsIso(cand, outerR, 0.01, 0.5)
        isoNeutralRaw = isoComp.neutralAbsIsoRaw(cand, outerR, 0.01, 0.5)
        isoNeutralWeighted = isoComp.neutralAbsIsoWeighted(cand, outerR, 0.01, 0.5)
        effArea = self.ea.getEffectiveArea(cand.Eta())
        neutral = getNeutralCorrections(isoNeutralRaw, isoNeutralWeighted,
                                        absIsoPU, rho, effArea, outerR)
        return makeMiniIsoDict(outerR, absIsoCharged, absIsoPU, neutral, cand.Pt())

    def fillInvalid(self):
        return makeMiniIsoDict(0., INVALID, INVALID, getInvalidCorrections(), INVALID)
