"""Core spine vector runner.

This module contains the actual runner, separated from the thin script in
``scripts/``. It loads a user config file, resolves configuration, runs the
processor and prints the result table.
"""

import sys
import json
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, List, Union

from spinevec.pipeline.processor import SpineVectorProcessor
from spinevec.spine.models import InvalidResult, SpinalPoint, SpineVectorResult
from spinevec.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig

__all__ = ['load_user_config_dict', 'load_points', 'run_spine_vector', 'main']

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 2


def load_user_config_dict(config_path: str) -> dict:
    """Execute a Python config file and return its CONFIG dict unvalidated.

    The first module attribute whose name starts with ``CONFIG`` and holds a
    dict is returned.

    Raises
    ------
    FileNotFoundError
        If ``config_path`` does not exist.
    ValueError
        If the file defines no CONFIG dict.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"User config file not found: {path}")

    spec = importlib.util.spec_from_file_location("spinevec_user_config", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict defined in {path}")


def load_points(config_dict: dict) -> List[SpinalPoint]:
    """Read the landmark list from a raw user config.

    Accepts ``POINTS`` (or ``points``) holding ``{"x", "y", "label"}`` dicts
    or ``(x, y, label)`` tuples.

    Raises
    ------
    ValueError
        If no point list is present or an entry is malformed.
    """
    raw = config_dict.get("POINTS", config_dict.get("points"))
    if raw is None:
        raise ValueError("User config has no POINTS list")

    points = []
    for i, item in enumerate(raw):
        if isinstance(item, dict):
            points.append(SpinalPoint(**item))
        elif isinstance(item, (list, tuple)) and len(item) in (2, 3):
            x, y, *rest = item
            points.append(SpinalPoint(x=x, y=y, label=rest[0] if rest else ""))
        else:
            raise ValueError(f"POINTS[{i}] must be a dict or an (x, y, label) tuple, got {item!r}")
    return points


def _setup_logging(level: str):
    """Configure the root logger with a console handler."""
    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)


def _print_result(result: Union[SpineVectorResult, InvalidResult], user_config_path: str):
    print(f"\n{'='*60}")
    print("Spine Vector Analysis")
    print('='*60)
    print(f"Config: {user_config_path}")

    if not result.is_valid:
        print(f"Status: INVALID ({result.reason.value})")
        print(f"Reason: {result.message}")
        print(f"Points: {result.total_points} {result.region_counts}")
        print('='*60)
        return

    print(f"Weight: {result.weight_kg:.1f} kg")
    print(f"Levels: {len(result.level_vectors)}")
    if result.excluded_labels:
        print(f"Excluded: {', '.join(result.excluded_labels)}")
    print('='*60)
    print(result.to_dataframe().to_string(index=False))
    print('='*60)


def run_spine_vector(
    user_config_path: str,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False
) -> Union[SpineVectorResult, InvalidResult]:
    """Compute spine vectors for the points in a user config file.

    Settings are resolved Param < User < CLI, logging is configured from
    the result, and the CONFIG file's POINTS go through one
    SpineVectorProcessor. The table (or the invalid reason) is printed.

    Parameters
    ----------
    user_config_path : str
        Python file defining CONFIG with settings and POINTS.

    cli_args : dict, optional
        CLI argument overrides. Keys: weight_kg, log_level. All optional.

    verbose : bool, optional
        DEBUG logging plus a JSON dump of the resolved configuration.

    Returns
    -------
    SpineVectorResult or InvalidResult

    Raises
    ------
    FileNotFoundError
        If the config file is missing.
    ValueError
        If configuration or point validation fails.

    Examples
    --------
    Defaults from the file::

        run_spine_vector("scripts/user_config.py")

    Run with a weight override::

        run_spine_vector("scripts/user_config.py", cli_args={"weight_kg": 75.0})
    """
    param_cfg = ParamConfig()

    user_cfg_dict = load_user_config_dict(user_config_path)
    user_cfg = UserConfig.model_validate(user_cfg_dict)

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    _setup_logging(config.logging.level)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))

    points = load_points(user_cfg_dict)
    logger.info("Loaded %d points from %s", len(points), user_config_path)

    processor = SpineVectorProcessor(config)
    result = processor.process(points)

    _print_result(result, user_config_path)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute regional and global spine force vectors")
    parser.add_argument("config", help="Path to user config file")
    parser.add_argument("--weight-kg", type=float, help="Override body weight (kg)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    result = run_spine_vector(
        args.config,
        cli_args={"weight_kg": args.weight_kg},
        verbose=args.verbose,
    )
    return EXIT_OK if result.is_valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
