# __init__.py
"""
Portfolio Service - personal portfolio API with news aggregation and browser tools.
"""

__version__ = "1.0.0"
__title__ = "Portfolio Service"
__description__ = (
    "Portfolio content, regional news aggregation, file and text encryption, "
    "PDF and image tools, Nepali transliteration and a private area"
)
