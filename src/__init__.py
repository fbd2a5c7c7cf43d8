# RefKeeper
# Main source package

from .core.app_config import get_version, get_app_name

__version__ = get_version()
__app_name__ = get_app_name()
