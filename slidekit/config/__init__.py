"""
Engine and logging configuration.
"""
