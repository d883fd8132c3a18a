"""3D visualisation of retinal attribution maps and layer boundaries."""
__version__ = "0.1.0"
