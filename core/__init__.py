"""core/ -- Loader, checker, configuration and output for authcheck.

Layer rule: core/ imports only stdlib + third-party libraries.
It does NOT import from api/. api/ and main.py import from core/.
"""
