# Runtime configuration
# Static tables live in known_emitters.py; settings that change per machine
# come from the environment (or a .env file in or above the working directory).

import os

from dotenv import find_dotenv, load_dotenv

from .known_emitters import ENVIRONMENTS

ENV_VAR = "VAA_INSPECTOR_ENV"
DEFAULT_ENV = "MAINNET"


def load_env_file() -> str:
    """Load the .env found from the working directory upwards; returns its path or ''"""
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)
    return path


# Load environment variables
load_env_file()


def get_environment(value=None) -> str:
    """Resolve the registry environment, validating the name"""
    if value is None:
        value = os.getenv(ENV_VAR, DEFAULT_ENV)
    env = value.strip().upper()
    if env not in ENVIRONMENTS:
        raise ValueError(f"Unknown environment {value!r}, expected one of {', '.join(ENVIRONMENTS)}")
    return env
