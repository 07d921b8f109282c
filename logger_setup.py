# logger_setup.py

import copy
import json
import logging
import os

import constants


def load_config(config_path='config.json'):
    """
    Loads the JSON configuration file.

    Falls back to constants.DEFAULT_CONFIG when the file does not exist, so the
    animation can be started from any working directory.

    Data Contract:
    - Inputs: config_path (str) - Path to the configuration file.
    - Outputs: dict with 'run_id', 'master_seed', 'logging' and 'simulation'.
    - Side Effects: None.
    """
    if not os.path.exists(config_path):
        return copy.deepcopy(constants.DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        config = json.load(f)

    # Missing top-level sections take their defaults
    for key, value in constants.DEFAULT_CONFIG.items():
        config.setdefault(key, copy.deepcopy(value))
    return config


def setup_logging(config, log_root='runs'):
    """
    Sets up logging for the application.

    Creates a run-specific log directory and configures a dedicated
    application logger (not the root logger) that writes to a log file only.
    A console handler would write over the curses screen, so none is added.

    Data Contract:
    - Inputs:
        - config (dict) - The loaded configuration.
        - log_root (str) - Directory under which run folders are created.
    - Outputs: The log file path (str).
    - Side Effects:
        - Configures the "ematrix" logger.
        - Creates directories for log files.
    - Invariants: Assumes the config contains 'run_id' and a 'logging' dictionary
      with 'level' and 'format'.
    """
    run_id = config['run_id']
    log_config = config['logging']

    # --- Get a dedicated logger for the application ---
    logger = logging.getLogger(constants.LOGGER_NAME)
    logger.setLevel(log_config['level'])

    # --- Prevent logs from propagating to the root logger ---
    logger.propagate = False

    # --- Create directories for logs ---
    log_dir = os.path.join(log_root, run_id)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'simulation.log')

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(log_config['format']))

    # Clear existing handlers to avoid duplication if this function is called again
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
    logger.addHandler(file_handler)

    logger.info(f"Logging initialized. Run ID: {run_id}. Log file: {log_file}")
    return log_file
