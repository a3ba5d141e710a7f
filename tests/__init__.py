"""
Test suite for mdproof.
"""
