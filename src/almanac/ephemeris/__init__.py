"""Analytic ephemerides and the coordinate pipeline.

Import submodules directly. The timekeeping package imports nutation
from here, so this module must not import anything.
"""
