"""
renosite Modules
================

Flask blueprint modules for the public site, the admin panel and the image proxy.
"""

__all__ = ['auth', 'images', 'ops', 'projects', 'site']
