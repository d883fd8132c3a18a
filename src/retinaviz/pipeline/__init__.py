"""
Derivation pipeline: turns the raw volumetric fields and mesh assets into
renderable VTK actors.

Note: Only the model layer, NumPy and PyVista/VTK are used here. This package
should NOT import PySide6.
"""
