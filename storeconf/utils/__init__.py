"""
storeconf Utilities

Logging setup, file helpers and host information.

Author: storeconf Project
License: MIT
"""
