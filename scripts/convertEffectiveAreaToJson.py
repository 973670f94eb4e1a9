#!/usr/bin/env python3
"""
Convert an effective area table to correctionlib JSON format

Features:
- Reads CMSSW-style text tables ("absEtaMin absEtaMax area" per line) or 1D ROOT histograms
- Checks that the |eta| bins are ordered and contiguous
- Writes a single binned correction with input absEta; |eta| outside the table gives 0
"""

import os
import argparse
from MiniIsoTools.effectiveAreas import EffectiveAreas


def convert_effective_area_to_json(input_file, output_file, name="effectiveArea", key="effectiveArea"):
    """Convert an effective area table to a correctionlib JSON file

    Args:
        input_file: Text table or ROOT file
        output_file: Output JSON path
        name: Name of the correction in the output
        key: Histogram key for ROOT input

    Returns:
        tuple: (output_file_path, number_of_bins)
    """
    print(f"Processing effective area file: {input_file}")
    ea = EffectiveAreas(input_file, name=key)
    cset = ea.toCorrectionSet(name=name, description=f"Effective areas from {os.path.basename(input_file)}")

    outDir = os.path.dirname(output_file)
    if outDir:
        os.makedirs(outDir, exist_ok=True)
    with open(output_file, "w") as fout:
        fout.write(cset.model_dump_json(exclude_unset=True, indent=2))

    print(f"Successfully wrote {len(ea.areas)} bins to {output_file}")
    return output_file, len(ea.areas)


def main():
    parser = argparse.ArgumentParser(
        description="Convert an effective area table to correctionlib JSON format",
        epilog="""
Examples:
  # Convert a text table
  python3 convertEffectiveAreaToJson.py -i effAreaElectrons_cone03_pfNeuHadronsAndPhotons_94X.txt -o effArea_electron.json

  # Convert a ROOT histogram
  python3 convertEffectiveAreaToJson.py -i effArea.root -k hEA_muon -o effArea_muon.json
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("-i", "--input", required=True, help="Input text table or ROOT file")
    parser.add_argument("-o", "--output", required=True, help="Output JSON file")
    parser.add_argument("-n", "--name", default="effectiveArea", help="Correction name in the output")
    parser.add_argument("-k", "--key", default="effectiveArea", help="Histogram key for ROOT input")

    args = parser.parse_args()

    try:
        output_file, num_bins = convert_effective_area_to_json(args.input, args.output, args.name, args.key)
        print(f"\nConversion completed successfully!")
        print(f"Output: {output_file}")
        print(f"Total |eta| bins: {num_bins}")
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
