#!/usr/bin/env python3
"""
Bombard-Ant - genetic algorithm for bomb placement over ant nests

Main entry point. All run parameters live in a YAML configuration file;
command-line flags only choose the file and override pacing.
"""

import sys
import argparse
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def main():
    """Main entry point with command-line argument parsing"""
    parser = argparse.ArgumentParser(
        description="Bombard-Ant - evolve bomb placements over ant nests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 bombard_cli.py                        # Run with config.yaml
  python3 bombard_cli.py --config custom.yaml   # Custom config file
  python3 bombard_cli.py --delay 0              # No pause between generations
  python3 bombard_cli.py --check                # Only print and validate the config
        """
    )

    parser.add_argument(
        '--config', '-c',
        default='config.yaml',
        help='Configuration file path (default: config.yaml)'
    )

    parser.add_argument(
        '--delay',
        type=float,
        metavar='SECONDS',
        help='Pause between generations (default: pacing.delay_seconds)'
    )

    parser.add_argument(
        '--check',
        action='store_true',
        help='Print the configuration summary and exit'
    )

    args = parser.parse_args()

    try:
        from bombard_ant.config_loader import load_config, print_config_summary, validate_config

        if args.check:
            config = load_config(args.config)
            print_config_summary(config, args.config)
            sys.exit(1 if validate_config(config) else 0)

        from bombard_ant.cli import run_from_config
        run_from_config(args.config, delay_seconds=args.delay)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
