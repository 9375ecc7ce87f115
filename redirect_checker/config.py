"""
1.0 Configuration Module
Loads and validates config.json for the redirection checker.
"""

import json
import logging
import os
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)

CONFIG_FILE_PATH = os.environ.get("REDIRECT_CHECKER_CONFIG", "config.json")

# Playwright load states accepted by page.goto(wait_until=...)
VALID_WAIT_STATES = ["commit", "domcontentloaded", "load", "networkidle"]

DEFAULT_CONFIG: Dict[str, Any] = {
    "input_file": "data/url_redirections.xlsx",
    "reports_directory": "reports",
    "template_path": "templates/report.html",
    "navigation_timeout_ms": 60000,
    "wait_until": "domcontentloaded",
    "heading_selector": "h1",
    "headless": True,
    "user_agent": None,
    "export_csv": True,
}


def load_config(config_path: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Loads config.json and merges it over the defaults."""
    path = config_path or CONFIG_FILE_PATH
    if not os.path.exists(path):
        logger.error(f"Configuration file not found: {path}")
        return None
    try:
        with open(path, 'r') as f:
            config_data = json.load(f)
        logger.info(f"Successfully loaded configuration from {path}")
        if not validate_config(config_data):
            return None
        return {**DEFAULT_CONFIG, **config_data}
    except json.JSONDecodeError as e:
        logger.error(f"Error decoding JSON from {path}: {e}")
        return None
    except OSError as e:
        logger.error(f"Could not read configuration file {path}: {e}")
        return None


def validate_config(config: Dict[str, Any]) -> bool:
    """Validates the structure and content of the configuration.

    Keys missing from the file fall back to DEFAULT_CONFIG, so only
    keys that are present get checked.
    """
    if not isinstance(config, dict):
        logger.error("Configuration must be a dictionary.")
        return False

    for key in ["input_file", "reports_directory", "template_path", "heading_selector"]:
        if key not in config:
            continue
        if not isinstance(config[key], str) or not config[key].strip():
            logger.error(f"Value for key '{key}' must be a non-empty string.")
            return False

    timeout = config.get("navigation_timeout_ms", DEFAULT_CONFIG["navigation_timeout_ms"])
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        logger.error("'navigation_timeout_ms' must be a positive integer (milliseconds).")
        return False

    wait_until = config.get("wait_until", DEFAULT_CONFIG["wait_until"])
    if wait_until not in VALID_WAIT_STATES:
        logger.error(f"'wait_until' must be one of {VALID_WAIT_STATES}, got '{wait_until}'.")
        return False

    user_agent = config.get("user_agent")
    if user_agent is not None and (not isinstance(user_agent, str) or not user_agent.strip()):
        logger.warning("'user_agent' is set but not a non-empty string. The browser default will be used.")

    input_file = config.get("input_file", DEFAULT_CONFIG["input_file"])
    if not os.path.exists(input_file):
        # Not fatal: the dataset is often dropped in after the config is written.
        logger.warning(f"Input dataset not found yet: {input_file}")

    logger.info("Configuration validation successful.")
    return True
