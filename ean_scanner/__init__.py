"""
EAN line scanner: camera-frame barcode recognition for retail checkouts.
"""

__version__ = "0.1.0"
