"""
MyndSelf API - signup and mood journal backend for the MyndSelf beta site.

This package provides a small JSON webserver that collects early-access email
signups and records mood check-ins in memory for the lifetime of the process.
"""

__version__ = "0.1.0"
