"""
Pytest configuration and shared fixtures.
"""

import pytest

from MiniIsoTools.effectiveAreas import EffectiveAreas
from MiniIsoTools.formats import Electron, Muon, SuperCluster, EventContext
from MiniIsoTools.isolation import IsolationComputer, SelfVeto


EA_TABLE = """\
# |eta| min   |eta| max   effective area (R=0.3)
0.000  1.000  0.1000
1.000  1.479  0.1200
1.479  2.000  0.0900
2.000  2.500  0.1000
"""


class FakeIsolationComputer(IsolationComputer):
    """Returns fixed sums and records every query."""

    def __init__(self, **sums):
        self.sums = {
            "chargedAbsIso": 0.,
            "puAbsIso": 0.,
            "photonAbsIsoRaw": 0.,
            "neutralHadAbsIsoRaw": 0.,
            "photonAbsIsoWeighted": 0.,
            "neutralHadAbsIsoWeighted": 0.,
            "neutralAbsIsoRaw": 0.,
            "neutralAbsIsoWeighted": 0.,
        }
        self.sums.update(sums)
        self.calls = []
        self.events = []

    def _query(self, method, cand, dR, innerR, threshold, selfVeto):
        self.calls.append((method, dR, innerR, threshold, selfVeto))
        return self.sums[method]

    def setCurrentEvent(self, event):
        self.events.append(event)

    def chargedAbsIso(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("chargedAbsIso", cand, dR, innerR, threshold, selfVeto)

    def puAbsIso(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("puAbsIso", cand, dR, innerR, threshold, selfVeto)

    def photonAbsIsoRaw(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("photonAbsIsoRaw", cand, dR, innerR, threshold, selfVeto)

    def neutralHadAbsIsoRaw(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("neutralHadAbsIsoRaw", cand, dR, innerR, threshold, selfVeto)

    def photonAbsIsoWeighted(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("photonAbsIsoWeighted", cand, dR, innerR, threshold, selfVeto)

    def neutralHadAbsIsoWeighted(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("neutralHadAbsIsoWeighted", cand, dR, innerR, threshold, selfVeto)

    def neutralAbsIsoRaw(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("neutralAbsIsoRaw", cand, dR, innerR, threshold, selfVeto)

    def neutralAbsIsoWeighted(self, cand, dR, innerR=0., threshold=0., selfVeto=SelfVeto.ALL):
        return self._query("neutralAbsIsoWeighted", cand, dR, innerR, threshold, selfVeto)

    def queried(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def ea_file(tmp_path):
    path = tmp_path / "effArea_R03.txt"
    path.write_text(EA_TABLE)
    return path


@pytest.fixture
def ea(ea_file):
    return EffectiveAreas(str(ea_file))


@pytest.fixture
def barrel_electron():
    return Electron(pt=100., eta=0.5, superCluster=SuperCluster(eta=0.52), isEB=True)


@pytest.fixture
def endcap_electron():
    return Electron(pt=100., eta=1.7, superCluster=SuperCluster(eta=1.7), isEB=False)


@pytest.fixture
def muon():
    return Muon(pt=25., eta=-1.2)


@pytest.fixture
def event():
    return EventContext(rho=20.)
