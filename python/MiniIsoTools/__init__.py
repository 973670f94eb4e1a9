#!/usr/bin/env python
"""
MiniIsoTools package for lepton mini-isolation.

Provides the pt-dependent cone radius, effective area tables, pileup-corrected
electron and muon mini-isolation, and the impact parameter variables.
"""

from MiniIsoTools.formats import SuperCluster, Vertex, Track, Lepton, Electron, Muon, EventContext
from MiniIsoTools.helpers import (
    SCHEMES,
    ELECTRON_KEYS,
    MUON_KEYS,
    getConeRadius,
    getRhoAreaNeutral,
    getDeltaBetaNeutral,
    getNeutralCorrections,
    makeMiniIsoDict
)
from MiniIsoTools.effectiveAreas import EffectiveAreas, resolveDataPath
from MiniIsoTools.isolation import (
    SelfVeto,
    IsolationComputer,
    ElectronMiniIsolation,
    MuonMiniIsolation
)
from MiniIsoTools.impactParameter import ElectronPVVars, MuonPVVars

__all__ = [
    # Formats
    'SuperCluster',
    'Vertex',
    'Track',
    'Lepton',
    'Electron',
    'Muon',
    'EventContext',
    # Helpers
    'SCHEMES',
    'ELECTRON_KEYS',
    'MUON_KEYS',
    'getConeRadius',
    'getRhoAreaNeutral',
    'getDeltaBetaNeutral',
    'getNeutralCorrections',
    'makeMiniIsoDict',
    # Effective areas
    'EffectiveAreas',
    'resolveDataPath',
    # Isolation
    'SelfVeto',
    'IsolationComputer',
    'ElectronMiniIsolation',
    'MuonMiniIsolation',
    # Impact parameters
    'ElectronPVVars',
    'MuonPVVars',
]
