"""
Views and helpers for reviewing changes made to a library by another program.
"""
