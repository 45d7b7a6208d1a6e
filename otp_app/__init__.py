"""
OTP App - Open Training Plan loader

Decodes structured endurance-training plans from JSON or YAML documents in
which any nested object may be given inline or as a URL to another document,
fetches and caches the referenced documents, and produces a fully resolved
plan.
"""

__version__ = "0.1.0"
__author__ = "OTP Team"
