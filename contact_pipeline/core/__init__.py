"""
Core record handling: models, validators, formatters and the normalizer.
"""
