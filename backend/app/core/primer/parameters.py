# File: backend/app/core/primer/parameters.py
# Version: v2.0.0
"""
Pydantic models for thermodynamic reaction conditions and calibration constants.

- `ThermodynamicSettings`: oligo / Na+ / Mg2+ / dNTP concentrations. The engine
  never falls back to a hidden default; callers pass a populated value every call.
  `DEFAULT_THERMO_SETTINGS` is just a named value callers may choose to pass.
- `ThermoCalibration`: empirical penalty and modification constants. Defaults
  come from constants.py; override them to calibrate against a reference tool.

Usage:
    from backend.app.core.primer.parameters import ThermodynamicSettings, DEFAULT_THERMO_SETTINGS
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, confloat, conint

from . import constants as C


class ThermodynamicSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    oligoConc: confloat(ge=0) = Field(..., description="Oligo (strand) concentration (µM)")
    naConc: confloat(ge=0) = Field(..., description="Monovalent cation concentration (mM)")
    mgConc: confloat(ge=0) = Field(..., description="Divalent cation concentration (mM)")
    dntpConc: confloat(ge=0) = Field(..., description="Free dNTP concentration (mM)")


DEFAULT_THERMO_SETTINGS = ThermodynamicSettings(oligoConc=0.2, naConc=50.0, mgConc=3.0, dntpConc=0.8)


class ThermoCalibration(BaseModel):
    """Empirical constants; dH in kcal/mol, dS in cal/(mol*K), boosts in °C."""
    model_config = ConfigDict(frozen=True)

    initiationDH: float = C.DEFAULT_INITIATION_DH
    initiationDS: float = C.DEFAULT_INITIATION_DS
    terminalAtDH: float = C.DEFAULT_TERMINAL_AT_DH
    terminalAtDS: float = C.DEFAULT_TERMINAL_AT_DS
    terminalMismatchDH: float = C.DEFAULT_TERMINAL_MISMATCH_DH
    terminalMismatchDS: float = C.DEFAULT_TERMINAL_MISMATCH_DS
    mismatchStepDH: float = C.DEFAULT_MISMATCH_STEP_DH
    mismatchStepDS: float = C.DEFAULT_MISMATCH_STEP_DS

    lnaGcBoost: confloat(ge=0) = C.DEFAULT_LNA_GC_BOOST
    lnaAtBoost: confloat(ge=0) = C.DEFAULT_LNA_AT_BOOST
    lnaReferenceLength: conint(ge=1) = C.DEFAULT_LNA_REFERENCE_LENGTH
    lnaMismatchPenalty: confloat(ge=0) = C.DEFAULT_LNA_MISMATCH_PENALTY

    mgbAtBoost: confloat(ge=0) = C.DEFAULT_MGB_AT_BOOST
    mgbGcBoost: confloat(ge=0) = C.DEFAULT_MGB_GC_BOOST

    def model_post_init(self, __context) -> None:  # pydantic v2 hook
        if self.lnaGcBoost < self.lnaAtBoost:
            raise ValueError("lnaGcBoost must be >= lnaAtBoost")
        if self.mgbGcBoost > self.mgbAtBoost:
            raise ValueError("mgbGcBoost must be <= mgbAtBoost")


DEFAULT_CALIBRATION = ThermoCalibration()
