"""
Core modules for Image Translation Studio
"""
