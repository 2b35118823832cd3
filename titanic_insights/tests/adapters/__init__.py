"""Integration tests for adapter implementations.

These tests verify that adapters correctly implement the port interfaces
and read the manifest the way the core expects.
"""
