"""
Pricing Calculator Package

Finds the best price for a product at a venue for a member by applying
conditional pricing modifiers (age, venue location, membership type) to the
product's base price.
"""

__version__ = "1.0.0"
