#!/usr/bin/env python3
"""
Azure Resource Manager resource adapters.
"""

import argparse
import asyncio
import logging
import os
from datetime import datetime

from arm_resource_adapters.operations.operation_interfaces import Operation, OperationParams
from arm_resource_adapters.operations.operators import CentralOperator

# ---------------------------------------------------------------------------- #
# ---------------------------------------------------------------------------- #
# ---------------------------------------------------------------------------- #


def setup_logging() -> str:
    """
    Configure logging with timestamp-based filename.

    Returns:
        str: The log filename that was created.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")  # noqa: DTZ005
    log_filename = f"arm_resource_adapters_{timestamp}.log"
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
        handlers=[logging.FileHandler(log_filename), logging.StreamHandler()],
    )
    return log_filename


def parse_config(argv: list[str] | None = None) -> OperationParams:
    """
    Parse command line arguments.

    Returns:
        OperationParams: The parsed operation parameters.
    """
    parser = argparse.ArgumentParser(description="Manages Azure Resource Manager resources from a configuration file.")
    parser.add_argument("--config-file-absolute-path", type=str, required=True, help="Absolute path to the configuration file, JSON or YAML.")
    parser.add_argument("--operation", type=str, required=True, choices=[operation.value for operation in Operation], help="The operation to execute.")
    args = parser.parse_args(argv)

    logging.info(f"Config file absolute path: {args.config_file_absolute_path}")
    logging.info(f"Operation: {args.operation}")

    operation_params = OperationParams(args.config_file_absolute_path, args.operation)
    if operation_params.validate():
        logging.info("Configuration validation passed")
    else:
        logging.error("Configuration validation failed")
        error_message = "Invalid configuration parameters."
        raise ValueError(error_message)

    return operation_params


# ---------------------------------------------------------------------------- #
# ---------------------------------------------------------------------------- #
# ---------------------------------------------------------------------------- #


async def async_main() -> None:
    """
    Async entry point.
    """
    logging.info(f"Starting ARM resource adapters with logs at: {setup_logging()}.")
    operation_params = parse_config()
    logging.debug(f"Configuration: {operation_params.to_pretty_json()}")
    await CentralOperator(operation_params).execute()
    logging.info("ARM resource operation complete.")


def main() -> None:
    """
    Synchronous entry point for the CLI.
    """
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
