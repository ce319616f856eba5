"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces:
- Edge storage (whitespace-delimited text files)
- Route solving (Floyd-Warshall)
- Caching of solved networks (in-memory, null)
"""
