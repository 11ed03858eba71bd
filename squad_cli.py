#!/usr/bin/env python3
"""
Squad GA CLI - Minimal entry point.

This is the command-line interface for the squad genetic algorithm.
All configuration is specified in YAML files.

Usage:
    python3 squad_cli.py run_config.yaml
    python3 squad_cli.py --config run_config.yaml
    python3 squad_cli.py --help

Examples:
    # Pick a squad from the sample candidate pool
    python3 squad_cli.py examples/sample_run.yaml

See squad_ga/squad_ga_config.yaml for the available GA settings.
"""

import logging
import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def main():
    """Main entry point for squad GA CLI."""
    # Handle help
    if len(sys.argv) < 2 or sys.argv[1] in ['-h', '--help', 'help']:
        print(__doc__)
        sys.exit(0 if len(sys.argv) > 1 else 1)

    # Parse config path
    config_path = sys.argv[1]

    if config_path.startswith('--config='):
        config_path = config_path.split('=', 1)[1]
    elif config_path == '--config':
        if len(sys.argv) < 3:
            print("Error: --config requires an argument")
            print(__doc__)
            sys.exit(1)
        config_path = sys.argv[2]

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    # Import and run
    try:
        from squad_ga.cli import run_from_config
        run_from_config(config_path)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
