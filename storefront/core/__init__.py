"""
Core application plumbing (configuration).
"""
