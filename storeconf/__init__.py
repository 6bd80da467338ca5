"""
storeconf

Startup configuration pipeline: loads raw settings, then defaults,
normalizes and validates them into a fully-resolved configuration.

Author: storeconf Project
License: MIT
"""

__version__ = "0.1.0"
