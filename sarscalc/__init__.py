"""SARS Calc - South African PAYE and UIF salary calculator."""

__version__ = "0.1.0"
