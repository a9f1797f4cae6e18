#!/usr/bin/env python3
"""
Main entry point for the Rotation Timer web application.

This script launches the Flask-based JSON API with a background ticker.
"""
import logging
import os

from rotation_timer.ui.web_app import run_web_app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # Persist names/exclusions next to this script
    data_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), "roster.json")
    run_web_app(data_file=data_file)
