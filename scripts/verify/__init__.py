"""
Verification scripts

These scripts are used to quickly verify functionality without running full test suites.
They provide detailed output and are meant to be run directly.

Usage:
    python scripts/verify/verify_pqgram_basic.py
"""
