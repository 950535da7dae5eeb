# File: backend/app/core/primer/constants.py
# Version: v0.3.0
"""
Constants and defaults for the primer thermodynamics and structure engine.

The published nearest-neighbor table and Owczarzy salt corrections come from
Biopython (Bio.SeqUtils.MeltingTemp); only physical constants live here.
The empirical modification and penalty constants are only defaults for
`ThermoCalibration` and are meant to be
calibrated against a reference tool (e.g. IDT OligoAnalyzer).
"""

from __future__ import annotations

GAS_CONSTANT = 1.987          # cal/(mol*K)
KELVIN = 273.15
T_REF_K = 310.15              # 37 °C, reference for dG

# Floor for the strand concentration entering ln(Ct) (mol/L)
CONC_EPSILON = 1e-12

# --- Default empirical constants (see ThermoCalibration) -----------------------------------------
DEFAULT_INITIATION_DH = 0.2
DEFAULT_INITIATION_DS = -5.7
DEFAULT_TERMINAL_AT_DH = 2.3
DEFAULT_TERMINAL_AT_DS = 4.1
DEFAULT_TERMINAL_MISMATCH_DH = 3.5
DEFAULT_TERMINAL_MISMATCH_DS = 4.6
DEFAULT_MISMATCH_STEP_DH = -1.2
DEFAULT_MISMATCH_STEP_DS = -4.5

DEFAULT_LNA_GC_BOOST = 5.0          # °C per G/C LNA at the reference length
DEFAULT_LNA_AT_BOOST = 3.0          # °C per A/T LNA at the reference length
DEFAULT_LNA_REFERENCE_LENGTH = 15   # boosts shrink in proportion beyond this length
DEFAULT_LNA_MISMATCH_PENALTY = 6.0  # °C subtracted per LNA sitting on a mismatch

DEFAULT_MGB_AT_BOOST = 18.0         # °C for a 0% GC duplex
DEFAULT_MGB_GC_BOOST = 8.0          # °C for a 100% GC duplex

# --- Structure scoring ---------------------------------------------------------------------------
DIMER_PAIR_DG = -2.0        # per complementary pair
DIMER_MISMATCH_DG = 0.4     # per non-complementary overlapping pair
DIMER_MIN_PAIRS = 2

HAIRPIN_GC_PAIR_DG = -2.2
HAIRPIN_AT_PAIR_DG = -1.4
HAIRPIN_LOOP_INIT_DG = 3.0
HAIRPIN_LOOP_SHORT_SLOPE = 0.2   # per base up to HAIRPIN_LOOP_SHORT_MAX
HAIRPIN_LOOP_LONG_SLOPE = 0.1    # per base beyond it
HAIRPIN_LOOP_SHORT_MAX = 10

HAIRPIN_STEM_MIN = 3
HAIRPIN_STEM_MAX = 14
HAIRPIN_LOOP_MIN = 3
HAIRPIN_LOOP_MAX = 60
HAIRPIN_END_OFFSET_MAX = 2
