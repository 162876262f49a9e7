#!/usr/bin/env python3
"""
geofence - Main Entry Point
"""

import logging
import sys


def main():
    """Main entry point"""
    from geofence.cli import cli

    try:
        return cli(prog_name="geofence")
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
