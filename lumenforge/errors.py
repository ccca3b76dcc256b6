"""
Exception types raised by LumenForge.

Numerical edge cases inside the tracer (misses, total internal reflection,
exhausted bounce budget) are not errors; these exceptions cover invalid
configuration and scene input detected before rendering starts.
"""


class LumenForgeError(Exception):
    """Base class for all LumenForge errors."""
    pass


class SettingsError(LumenForgeError, ValueError):
    """Invalid render settings (dimensions, sample counts, depth)."""
    pass


class CameraError(LumenForgeError, ValueError):
    """Camera parameters that cannot produce a valid view frame."""
    pass


class SceneParseError(LumenForgeError, ValueError):
    """Error during scene parsing."""
    pass
