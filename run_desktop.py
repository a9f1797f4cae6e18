#!/usr/bin/env python3
"""
Main entry point for the Rotation Timer desktop application.

This script launches the Tkinter-based desktop interface.
"""
import logging
import os

from rotation_timer.ui.tkinter_app import run_tkinter_app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    data_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), "roster.json")
    run_tkinter_app(data_file)
