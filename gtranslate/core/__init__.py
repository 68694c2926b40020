"""
Core module for gtranslate
==========================
"""
