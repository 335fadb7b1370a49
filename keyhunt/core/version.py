"""
Version information
"""

from keyhunt import __version__
from keyhunt.config.settings import settings


def get_version() -> str:
    """
    Application version from settings

    Returns:
        str: Version string
    """
    return getattr(settings, 'version', __version__)


def get_app_name() -> str:
    return getattr(settings, 'app_name', 'keyhunt')


def get_version_banner() -> str:
    """``keyhunt 0.1.0``"""
    return f"{get_app_name()} {get_version()}"
