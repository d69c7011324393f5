"""
Content services: shortcodes, auto-linking, headings and rendering.
"""
