"""
Offer Pricing Package

Batch-offer pricing for single products and whole carts.
Splits a requested quantity into full batches billed at the special-offer rate
and remainder units billed at the regular price.
"""

__version__ = "1.0.0"
