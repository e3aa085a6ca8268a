"""
Users module: signup, login and profile lookups.
"""
