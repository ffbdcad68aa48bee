import os
from typing import Iterable, List

from logger import get_logger
from utils import existing_files, unique_paths

logger = get_logger(__name__)

SYSTEM_CACHE = "/usr/share/applications/mimeinfo.cache"


def candidate_sources(extra: Iterable[str] = ()) -> List[str]:
    home = os.path.expanduser("~")
    config_home = os.getenv("XDG_CONFIG_HOME") or os.path.join(home, ".config")
    data_home = os.getenv("XDG_DATA_HOME") or os.path.join(home, ".local", "share")
    # User files first, then the system-wide cache; order only affects logging, never the merge.
    paths = [
        os.path.join(config_home, "mimeapps.list"),
        os.path.join(data_home, "applications", "mimeapps.list"),
        SYSTEM_CACHE,
    ]
    paths.extend(extra)
    return unique_paths(paths)


def discover_sources(extra: Iterable[str] = ()) -> List[str]:
    found = existing_files(candidate_sources(extra))
    logger.info("Available mime files: %s", found)
    return found
