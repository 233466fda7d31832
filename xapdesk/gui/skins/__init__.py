"""
Control surface skins

A skin is a Python module with a SKIN dict of colours, fonts and sizes.
"""

from . import default

# Active skin - change this to switch skins
active = default
