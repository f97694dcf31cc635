#!/usr/bin/env python3
"""Convenience runner for the EV route planner.

Usage:
    python run.py plan "Bangalore" "Mumbai"
    python run.py serve
"""
import logging
import sys

from ev_route_planner.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    sys.exit(main())
