#!/usr/bin/env python
"""
Data format classes for mini-isolation inputs.

Provides lightweight lepton, track and event containers with the accessor style
of the analysis physics objects (Pt(), Eta(), ...), so the isolation tools can be
fed either from reconstructed objects or from synthetic values in tests.
"""

import numpy as np


class SuperCluster:
    """Reference supercluster of an electron. Only the position is needed."""
    def __init__(self, eta=0.):
        self.eta = eta

    def Eta(self):
        return self.eta


class Vertex:
    """Primary vertex position (cm)."""
    def __init__(self, x=0., y=0., z=0.):
        self.x = x
        self.y = y
        self.z = z

    def Position(self):
        return (self.x, self.y, self.z)


class Track:
    """
    Track reference point and momentum at that point.

    Provides the linearised impact parameters with respect to a given position,
    same convention as the reconstruction track dxy/dz. A zero-pt track gives
    inf/nan instead of raising.
    """
    def __init__(self, vx=0., vy=0., vz=0., px=0., py=0., pz=0.):
        self.vx, self.vy, self.vz = vx, vy, vz
        self.px, self.py, self.pz = px, py, pz

    def Pt(self):
        return (self.px**2 + self.py**2)**0.5

    def Dxy(self, position):
        x, y, _ = position
        pt = np.float64(self.Pt())
        with np.errstate(divide="ignore", invalid="ignore"):
            return float((-(self.vx - x)*self.py + (self.vy - y)*self.px) / pt)

    def Dz(self, position):
        x, y, z = position
        pt = np.float64(self.Pt())
        with np.errstate(divide="ignore", invalid="ignore"):
            return float((self.vz - z) - ((self.vx - x)*self.px + (self.vy - y)*self.py) / pt * self.pz / pt)


class Lepton:
    """
    Common lepton accessors.

    dB/edB are the 3D impact parameter with respect to the primary vertex and its
    uncertainty. hasOriginalObject mirrors the reference to the object the lepton
    was built from, which can be dropped in slimmed inputs.
    """
    def __init__(self, pt=0., eta=0., phi=0., charge=0, dB=0., edB=0., hasOriginalObject=True):
        self.pt = pt
        self.eta = eta
        self.phi = phi
        self.charge = charge
        self.dB = dB
        self.edB = edB
        self.hasOriginalObject = hasOriginalObject

    def Pt(self):
        return self.pt

    def Eta(self):
        return self.eta

    def Phi(self):
        return self.phi

    def Charge(self):
        return self.charge

    def DB(self):
        return self.dB

    def EDB(self):
        return self.edB

    def HasOriginalObject(self):
        return self.hasOriginalObject


class Electron(Lepton):
    def __init__(self, pt=0., eta=0., phi=0., charge=0,
                 superCluster=None, isEB=True, gsfTrack=None, **kwargs):
        super().__init__(pt, eta, phi, charge, **kwargs)
        self.superCluster = superCluster
        self.isEB = isEB
        self.gsfTrack = gsfTrack

    def SuperCluster(self):
        """Reference supercluster, None if the reference is missing."""
        return self.superCluster

    def IsEB(self):
        return self.isEB

    def GsfTrack(self):
        return self.gsfTrack


class Muon(Lepton):
    def __init__(self, pt=0., eta=0., phi=0., charge=0, bestTrack=None, **kwargs):
        super().__init__(pt, eta, phi, charge, **kwargs)
        self.bestTrack = bestTrack

    def BestTrack(self):
        """Best track of the muon, None if missing."""
        return self.bestTrack


class EventContext:
    """
    Per-event quantities consumed by the lepton tools.

    Args:
        rho: Pileup energy density, None if not available
        pv: Primary vertex (Vertex), None if not available
    """
    def __init__(self, rho=None, pv=None):
        self.rho = rho
        self.pv = pv

    def currentPileupDensity(self):
        return self.rho if self.rho is not None else 0.

    def primaryVertexPosition(self):
        return self.pv.Position() if self.pv is not None else None
