"""Version information."""
import logging
from importlib import metadata


PACKAGE_NAME = "logic-graph"


try:
    __version__ = metadata.version(PACKAGE_NAME)

except metadata.PackageNotFoundError as error:
    logging.warning(
        "%s - so could not get the version",
        error
    )
    __version__ = "unknown"
