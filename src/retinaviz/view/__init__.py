"""Qt widgets hosting the 3D view and its controls."""
