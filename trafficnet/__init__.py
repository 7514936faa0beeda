"""
Road network model with per-intersection signal cycling and a text file format.
"""
__version__ = "0.1.0"
