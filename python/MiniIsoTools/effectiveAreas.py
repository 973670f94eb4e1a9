#!/usr/bin/env python
"""
Effective area tables for the rho * area pileup correction.

Tables are held as a correctionlib binned correction in |eta| and can be read from
- a text table with one "absEtaMin absEtaMax area" line per bin
- a 1D ROOT histogram (uproot)
- a correctionlib JSON file
"""

import os
import gzip
import numpy as np
import uproot
import correctionlib.schemav2 as cs

DATA_PATH_ENV = "MINIISO_DATA"


def resolveDataPath(path):
    """
    Resolve a data file path.

    Existing paths are returned as they are, otherwise the path is looked up
    relative to each directory listed in $MINIISO_DATA.

    Raises:
        RuntimeError if the file cannot be found
    """
    if os.path.exists(path):
        return path
    searchDirs = [d for d in os.environ.get(DATA_PATH_ENV, "").split(os.pathsep) if d]
    for searchDir in searchDirs:
        candidate = os.path.join(searchDir, path)
        if os.path.exists(candidate):
            return candidate
    raise RuntimeError(f"Effective area file not found: {path} (searched {searchDirs} from ${DATA_PATH_ENV})")


def readEffectiveAreaText(filePath):
    """
    Read a text effective area table.

    Returns:
        Tuple of (edges, areas) lists
    """
    bins = []
    with open(filePath, "r") as f:
        for lineNo, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) != 3:
                raise ValueError(f"{filePath}:{lineNo}: expected 'absEtaMin absEtaMax area', got '{line}'")
            try:
                bins.append(tuple(float(p) for p in parts))
            except ValueError:
                raise ValueError(f"{filePath}:{lineNo}: non-numeric entry in '{line}'")
    return _binsToEdges(bins, filePath)


def readEffectiveAreaHist(filePath, key="effectiveArea"):
    """Read a 1D histogram of effective areas in |eta|."""
    with uproot.open(filePath) as f:
        values, edges = f[key].to_numpy()
    edges = edges.tolist()
    bins = [(edges[i], edges[i+1], float(values[i])) for i in range(len(values))]
    return _binsToEdges(bins, f"{filePath}:{key}")


def readEffectiveAreaJson(filePath, name="effectiveArea"):
    """
    Read an effective area correction from a correctionlib JSON file.

    The correction called name is used, or the only correction of the set.
    """
    opener = gzip.open if filePath.endswith(".gz") else open
    with opener(filePath, "rt") as f:
        cset = cs.CorrectionSet.model_validate_json(f.read())
    corrections = {corr.name: corr for corr in cset.corrections}
    if name not in corrections and len(corrections) == 1:
        name = next(iter(corrections))
    if name not in corrections:
        raise KeyError(f"{filePath}: no correction {name}, available: {list(corrections)}")
    return corrections[name]


def _binsToEdges(bins, source):
    if not bins:
        raise ValueError(f"{source}: no effective area bins")
    edges = [bins[0][0]]
    areas = []
    for absEtaMin, absEtaMax, area in bins:
        if absEtaMin < 0.:
            raise ValueError(f"{source}: negative |eta| bin edge {absEtaMin}")
        if not absEtaMin < absEtaMax:
            raise ValueError(f"{source}: empty |eta| bin [{absEtaMin}, {absEtaMax})")
        if absEtaMin != edges[-1]:
            raise ValueError(f"{source}: |eta| bins are not contiguous at {edges[-1]} / {absEtaMin}")
        edges.append(absEtaMax)
        areas.append(area)
    return edges, areas


def makeEffectiveAreaCorrection(edges, areas, name="effectiveArea", description="Effective area"):
    """Build a binned correction in |eta|; |eta| outside the table gives 0."""
    return cs.Correction(
        name=name,
        version=1,
        description=description,
        inputs=[cs.Variable(name="absEta", type="real", description="Absolute pseudorapidity")],
        output=cs.Variable(name="effArea", type="real", description="Effective area"),
        data=cs.Binning(
            nodetype="binning",
            input="absEta",
            edges=[float(e) for e in edges],
            content=[float(a) for a in areas],
            flow=0.,
        ),
    )


class EffectiveAreas:
    """
    Immutable |eta| -> effective area lookup.

    Loaded once from a resource path (see resolveDataPath); the underlying
    correction evaluator only reads, so one instance can be shared by all
    candidates and threads.

    Args:
        path: Text, ROOT (.root) or correctionlib JSON (.json, .json.gz) file
        name: Correction name in a JSON correction set, or histogram key in a ROOT file
    """
    def __init__(self, path, name="effectiveArea"):
        self.path = resolveDataPath(path)
        self.edges = None
        self.areas = None
        if self.path.endswith(".json") or self.path.endswith(".json.gz"):
            corr = readEffectiveAreaJson(self.path, name)
            self.correction = corr.to_evaluator()
            self.useAbsEta = corr.inputs[0].name.startswith("abs")
        else:
            if self.path.endswith(".root"):
                self.edges, self.areas = readEffectiveAreaHist(self.path, name)
            else:
                self.edges, self.areas = readEffectiveAreaText(self.path)
            self.correction = makeEffectiveAreaCorrection(self.edges, self.areas, name=name).to_evaluator()
            self.useAbsEta = True

    @classmethod
    def fromBins(cls, edges, areas):
        """Build a table directly from |eta| edges and areas."""
        self = cls.__new__(cls)
        self.path = None
        self.edges, self.areas = _binsToEdges(
            [(edges[i], edges[i+1], areas[i]) for i in range(len(areas))], "fromBins")
        self.correction = makeEffectiveAreaCorrection(self.edges, self.areas).to_evaluator()
        self.useAbsEta = True
        return self

    def getEffectiveArea(self, eta):
        """
        Effective area for a pseudorapidity.

        Args:
            eta: Pseudorapidity, scalar or numpy array

        Returns:
            Effective area (float, or array for array input)
        """
        x = np.abs(eta) if self.useAbsEta else eta
        if np.ndim(x) == 0:
            return float(self.correction.evaluate(float(x)))
        return self.correction.evaluate(np.asarray(x, dtype=np.float64))

    def toCorrectionSet(self, name="effectiveArea", description="Effective area"):
        """
        Correction set holding this table, for writing to JSON.

        Only available for tables read from text or ROOT files.
        """
        if self.edges is None:
            raise RuntimeError(f"Effective areas from {self.path} are already a correctionlib set")
        return cs.CorrectionSet(
            schema_version=2,
            description=description,
            corrections=[makeEffectiveAreaCorrection(self.edges, self.areas, name=name, description=description)],
        )
