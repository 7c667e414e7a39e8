#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Helpers shared by the traversal engine: node inspection, text handling and code blocks."""
