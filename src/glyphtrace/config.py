"""
Configuration constants
=======================
Central registry for the numeric tolerances and rendering defaults shared by
the geometry engine, the renderer and the command-line driver.

Exports:
    HIT_EPSILON (float): Minimum hit distance from a ray origin. Hits closer
        than this are ignored so shadow rays leaving a surface do not report
        the surface itself.
    NORMAL_EPSILON (float): Lengths at or below this normalize to zero.
    DEFAULT_PALETTE (str): Light-level glyphs, darkest first.
"""

# Geometry tolerances
HIT_EPSILON: float = 1e-6
NORMAL_EPSILON: float = 1e-12

# Rendering defaults
DEFAULT_PALETTE: str = " .:-=+*#%@"
DEFAULT_WIDTH: int = 80
DEFAULT_HEIGHT: int = 40
DEFAULT_FOV_DEGREES: float = 60.0
# Terminal cells are roughly twice as tall as they are wide
DEFAULT_PIXEL_ASPECT: float = 0.5

# Scene defaults for the command-line driver
DEFAULT_LIGHT: tuple = (4.0, 6.0, 8.0)
DEFAULT_CAMERA_DISTANCE: float = 6.0
