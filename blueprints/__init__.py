"""
Blueprints Package - Modular application structure
Each blueprint handles a specific page family of the site
"""

__all__ = ['pages', 'projects', 'meta']
