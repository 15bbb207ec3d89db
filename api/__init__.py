"""
HTTP layer for Image Translation Studio
"""
