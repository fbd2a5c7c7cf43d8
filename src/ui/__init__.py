"""
UI Package - User interface components and views
"""
