"""
Recipes module: create a recipe owned by the caller, read one by id.
"""
