"""
Example custom prelude for chunkparse.

This file demonstrates how to create custom preludes that extend the
built-in reduction tables.

Usage:
    chunkparse -p examples/custom_prelude.py -e "12 gcd 8"

Or in scripts:
    :prelude examples/custom_prelude.py
    12 gcd 8
"""

import math
import re

from chunkparse import binary, numeric, FULL_PRELUDE

# Word operators are matched as whole words only
GCD = re.compile(r"\bgcd\b")
LCM = re.compile(r"\blcm\b")

# Custom operators first: table order is reduction priority
PRELUDE = {
    GCD: numeric(math.gcd),
    LCM: numeric(lambda a, b: a * b // math.gcd(a, b)),
    "max": numeric(max),
    "min": numeric(min),
    "..": binary(lambda a, b: list(range(int(a), int(b) + 1))),
    **FULL_PRELUDE,
}
