"""
Web application package for the chess opponent.

Provides a FastAPI-based JSON API for asking the opponent for a move at a
given difficulty and for reading the status of a position.
"""
