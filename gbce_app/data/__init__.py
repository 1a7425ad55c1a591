"""
Trade and instrument data models, validation and payload parsing.
"""
