#!/usr/bin/env python3
"""
ghstats
Reports GitHub review activity and pull requests waiting for review to Feishu.

Examples:
    ./gh-stats.py -c ghstats.toml review daily
    ./gh-stats.py -c ghstats.toml review debug --start 2021-05-01T00:00:00 --end 2021-05-08T00:00:00
    ./gh-stats.py -c ghstats.toml pkgs weekly
"""

import sys

from ghstats.cli import main


if __name__ == "__main__":
    sys.exit(main())
