"""GIGS: conformance checks for geospatial referencing implementations.

Turns the GIGS tabular reference datasets into checks run against
factory implementations discovered at runtime.
"""

__version__ = "1.0.0"
