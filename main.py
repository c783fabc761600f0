#!/usr/bin/env python3
"""Command-line entry point for the xmlstats ingestion client."""

from xmlstats_ingest.cli import main

if __name__ == "__main__":
    main()
