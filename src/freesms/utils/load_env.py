"""Load environment variables from a .env file for local use."""

import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def load_env(env_file: Optional[Union[str, Path]] = None, override: bool = False) -> bool:
    """
    Load environment variables (FREESMS_USER, FREESMS_PASS, ...) from a .env file.

    Args:
        env_file: Path of the .env file; searched upward from the working
            directory when omitted
        override: Whether values in the file replace existing variables

    Returns:
        bool: True if a file was found and loaded
    """
    if env_file is None:
        env_file = find_dotenv(usecwd=True)
        if not env_file:
            logger.debug("No .env file found")
            return False

    env_path = Path(env_file)
    if not env_path.exists():
        logger.warning(f"No .env file found at {env_path}")
        return False

    load_dotenv(env_path, override=override)
    logger.info(f"Environment variables loaded from {env_path}")
    return True
