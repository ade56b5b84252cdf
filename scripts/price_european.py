#!/usr/bin/env python
"""
Price European options three ways and cross-check the results.

This script is a thin wrapper around:
    option_pricer.apps.price_european
"""

import sys

from option_pricer.apps.price_european import main


if __name__ == "__main__":
    sys.exit(main())
