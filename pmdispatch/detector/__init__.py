"""Detector module for resolving which package manager governs a directory.

Public API:
    detect(cwd, programmatic=False) -> DetectionResult
"""

from pmdispatch.detector.orchestrator import detect
from pmdispatch.detector.types import DetectionResult

__all__ = ["detect", "DetectionResult"]
