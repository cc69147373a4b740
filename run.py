#!/usr/bin/env python3
"""Convenience runner for the track alignment CLI.

Usage:
    python run.py normalize --base route.xlsx --record run.gpx
"""
import logging
import sys

from pace_tracks.config import LOG_FORMAT
from pace_tracks.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    sys.exit(main())
