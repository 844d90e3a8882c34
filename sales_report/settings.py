"""
Settings for the sales report engine and service.

Plain module-level constants; only the log level can be overridden from the
environment.
"""

import os
from decimal import Decimal

# Projection
TOP_PRODUCTS_LIMIT = 10
MONEY_QUANTUM = Decimal("0.01")

# Reference bonus policy (share of profit by rank)
FIRST_PLACE_RATE = Decimal("0.15")
PODIUM_RATE = Decimal("0.10")  # second and third place
DEFAULT_RATE = Decimal("0.05")

# Seed data
SEED = 42

# Logging
LOG_LEVEL = os.getenv("SALES_REPORT_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
