#!/usr/bin/env python3
"""
SonarQube Exporter Runner.

Convenience script to run the exporter from a source checkout.

Usage:
    python run_exporter.py --sonarqube-url https://sonar.example.com

Or run as module:
    python -m sonarqube_exporter
"""

import sys
import os

# Add python directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'python'))

if __name__ == "__main__":
    from sonarqube_exporter.__main__ import main
    import asyncio
    sys.exit(asyncio.run(main()))
