"""
Command-line interface and entry points for deployprops.

Validates deployment config files and shows how their props chain resolves.
Executors referenced by ``dispatcher_from_config`` entries are not looked up;
the path is reported as is.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from deployprops.core.logger import configure_root_logger, get_logger
from deployprops.models.deployment_config import DeploymentConfig, props_to_config
from deployprops.models.props import Props
from deployprops.resolver import resolve_deployment

logger = get_logger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    """Read a deployment config file (JSON or YAML) into a dict."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, "r") as f:
        if config_file.suffix == ".json":
            config = json.load(f)
        elif config_file.suffix in (".yaml", ".yml"):
            import yaml

            config = yaml.safe_load(f)
        else:
            raise ValueError(
                f"Unsupported config format: {config_file.suffix}. "
                "Use .json or .yaml"
            )
    logger.info(f"Loaded config from {config_path}")
    return config


def _describe(node: Props) -> Dict[str, Any]:
    if node.configurable:
        return node.model_dump(mode="json", exclude={"next"})
    return {"kind": node.kind, "handle": repr(node)}  # type: ignore[attr-defined]


def main(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Validate a deployment config and resolve its props chain.

    Args:
        config_path: Path to JSON/YAML configuration file
        config_dict: Direct configuration dictionary

    Returns:
        Result with the deployment name, its chain head first and the
        resolved settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If neither config_path nor config_dict provided
        pydantic.ValidationError: If the configuration is invalid

    Example:
        >>> from deployprops.cli import main
        >>> result = main(config_dict={"name": "worker", "props": [{"kind": "mailbox_capacity", "capacity": 10}]})
        >>> result["resolved"]["mailbox_capacity"]
        10
    """
    if config_dict is not None:
        config = config_dict
        logger.info("Using provided config dictionary")
    elif config_path:
        config = load_config(config_path)
    else:
        raise ValueError("Either config_path or config_dict must be provided")

    cfg = DeploymentConfig.model_validate(config)
    props = cfg.to_props()
    resolved = resolve_deployment(props, cfg.settings, actor_name=cfg.name)

    return {
        "name": cfg.name,
        "props": props_to_config(props),
        "resolved": {
            "mailbox_capacity": resolved.mailbox_capacity,
            "dispatcher": _describe(resolved.dispatcher),
        },
    }


def validate_config(config_path: str) -> bool:
    """
    Validate a deployment config file without resolving it.

    Returns:
        True if configuration is valid

    Raises:
        Exception: If configuration is invalid
    """
    try:
        config = load_config(config_path)
        DeploymentConfig.model_validate(config)
        logger.info("Configuration is valid")
        return True
    except Exception as e:
        logger.error(f"Config validation failed: {str(e)}")
        raise


def cli(argv: Optional[list] = None) -> int:
    """
    Command-line interface for deployprops.

    Usage:
        deployprops validate /path/to/deployment.json
        deployprops show /path/to/deployment.yaml
    """
    parser = argparse.ArgumentParser(
        prog="deployprops",
        description="Validate and inspect actor deployment props",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    validate_parser = subparsers.add_parser("validate", help="Validate a deployment config")
    validate_parser.add_argument("config", help="Path to configuration file (JSON or YAML)")

    show_parser = subparsers.add_parser("show", help="Print the props chain and its resolution")
    show_parser.add_argument("config", help="Path to configuration file (JSON or YAML)")

    args = parser.parse_args(argv)

    if args.verbose:
        configure_root_logger("DEBUG")

    if args.command == "validate":
        try:
            validate_config(args.config)
            return 0
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            return 1

    elif args.command == "show":
        try:
            result = main(config_path=args.config)
        except Exception as e:
            logger.error(f"Show failed: {e}")
            return 1
        print(json.dumps(result, indent=2))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(cli())
