"""
Test suite for the photowall client.
"""
