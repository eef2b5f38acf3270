"""
Version information for the update handler package.
"""

__version__ = "1.0.0"

VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "release": "stable",
}

def get_version_string() -> str:
    """
    Get a formatted version string.

    Returns:
        Formatted version string
    """
    return f"{__version__} ({VERSION_INFO['release']})"
