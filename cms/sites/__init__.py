"""
CMS Sites
=========
"""
