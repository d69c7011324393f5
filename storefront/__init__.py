"""
PyStorefront: content shortcode engine and storefront rendering service.
"""
