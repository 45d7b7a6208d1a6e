"""
Scalar value codecs.

Decoders for fields that accept more than one textual shape: workout
measures, target volumes and direct intensities. Pure and synchronous.
"""

from .intensity import DirectIntensity, decode_direct_intensity
from .measure import WorkoutMeasure
from .volume import TargetVolume

__all__ = [
    "DirectIntensity",
    "decode_direct_intensity",
    "WorkoutMeasure",
    "TargetVolume",
]
