"""Properties app package.

Holds the property and room models read by the pricing and payment core,
and the tenancy checks used to authorize changes to rooms.
"""
